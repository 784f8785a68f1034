"""Rhyme-scheme lookup: map a scheme name to the structural description handed to the model.

Both tables are ordered. The first entry with a matching keyword wins, so
"AABB (Couplets)" lands on the couplets branch before anything more exotic.
"""

from __future__ import annotations

RhymeRule = tuple[tuple[str, ...], str]

DEFAULT_RHYME_DESCRIPTION = "Ensure consistent end rhymes (Anthya Prasa) for all couplets."
DEFAULT_CONDENSED_DESCRIPTION = "Consistent end rhymes (Anthya Prasa)."

RHYME_SCHEMES: tuple[RhymeRule, ...] = (
    # basic patterns
    (("AABB", "Couplet"), "Couplets (AABB). Line 1 rhymes with 2. Line 3 rhymes with 4. Perfect for catchy hooks. (e.g., aa-ta, paa-ta)"),
    (("ABAB", "Alternate"), "Alternate rhyme (ABAB). Line 1 rhymes with 3. Line 2 rhymes with 4. Creates musical flow."),
    (("ABCB", "Ballad"), "Ballad style (ABCB). Only Line 2 and 4 rhyme. Lines 1 and 3 are free. Good for storytelling."),
    (("ABBA", "Enclosed"), "Enclosed rhyme (ABBA). Line 1 rhymes with 4. Line 2 rhymes with 3. Creates symmetry."),
    (("AAAA", "Monorhyme"), "Monorhyme (AAAA). Every single line must end with the same sound/rhyme. Hypnotic effect."),
    # complex western
    (("AABA", "Rubaiyat"), "Rubaiyat style (AABA). Lines 1, 2, and 4 must rhyme. Line 3 is unrhymed. Persian origin."),
    (("AABCCB", "Sestet"), "Sestet (AABCCB). Line 1-2 rhyme, 4-5 rhyme, 3-6 rhyme. Six-line stanza."),
    (("ABABCC", "Shakespearean Tail"), "Shakespearean tail (ABABCC). Alternate rhyme + couplet ending. Strong closure."),
    (("ABABBCC", "Rhyme Royal"), "Rhyme Royal (ABABBCC). Seven-line stanza with concluding couplet. Regal feel."),
    (("ABABCDCD", "Ottava Rima"), "Ottava Rima style (ABABCDCD). Eight-line stanza, two quatrains. Epic narrative."),
    (("Terza",), "Terza Rima (ABA BCB CDC). Chained rhyme linking stanzas. Line 2 of stanza 1 rhymes with Lines 1 & 3 of stanza 2."),
    (("Limerick",), "Limerick (AABBA). Lines 1, 2, 5 rhyme (long). Lines 3, 4 rhyme (short). Humorous rhythm."),
    (("Villanelle",), "Villanelle. Complex repeating pattern with two refrains. 19 lines, ABA rhyme scheme with repeating lines."),
    (("Sonnet",), "Sonnet (14 lines). Three quatrains + couplet: ABAB CDCD EFEF GG. Shakespearean structure with volta."),
    # indian classical
    (("Sanskrit", "Sloka", "Anushtubh"), "Sanskrit Slokas (Anushtubh). 8 syllables per quarter verse. Traditional Vedic meter for devotional content. Maintain chandas (prosody)."),
    (("Doha",), "Doha (Hindi Couplet). Two-line stanza with internal caesura. 13+11 matra pattern. Sant tradition."),
    (("Chaupai",), "Chaupai (AABB Quatrain). Four-line verse with couplet rhyme. Used in Ramcharitmanas. 16 matra per line."),
    (("Kavita", "Muktaka"), "Muktaka (Free-standing verse). Each stanza is complete thought. No mandatory rhyme linking stanzas."),
    (("Ghazal",), "Ghazal (AA BA CA DA...). First couplet rhymes both lines (AA). Then only second line rhymes (BA, CA). Radif and qaafiya."),
    (("Bhajan",), "Bhajan pattern. Devotional repeat structure. Simple AABB with chorus refrain. Call-response format."),
    # song structures
    (("Verse-Chorus",), "Verse-Chorus structure. Verses (AABB) alternate with chorus (CCDD). Chorus repeats identically."),
    (("Call-Response",), "Call-Response (ABAB). First line is 'call', second is 'response'. Interactive singing pattern."),
    (("Pallavi", "Charanam"), "Pallavi-Charanam (Carnatic). Pallavi = refrain/chorus. Charanam = verses. Pallavi repeats after each charanam."),
    (("Sthayi", "Antara"), "Sthayi-Antara (Hindustani). Sthayi = lower octave refrain. Antara = higher octave verse. Classical structure."),
    (("Hip-Hop Flow",), "Hip-Hop internal rhymes. Multiple rhymes within single line, not just end rhymes. Focus on flow and rhythm."),
    (("Rap Multi",), "Rap Multisyllabic rhymes. Multiple syllable rhymes: 'education / revelation'. Complex wordplay and internal rhyming."),
    # modern
    (("Free Verse", "No Rhyme"), "Free Verse. No strict rhyme scheme required. Focus entirely on rhythm, flow, imagery, and emotional expression."),
    (("Blank Verse",), "Blank Verse. Unrhymed but maintains iambic pentameter. Dignified, speech-like quality."),
    (("Slant Rhyme",), "Slant/Near rhymes. Words sound similar but don't perfectly rhyme (road/load vs road/rude). Modern, subtle."),
    (("Internal Rhyme",), "Internal rhymes. Rhymes occur within lines, not just at ends. Creates dense sonic texture."),
    (("Chain Rhyme",), "Chain rhyme linking stanzas. Last word of one stanza rhymes with first of next. Continuity."),
)

# Shorter table used by the review pass
CONDENSED_RHYME_SCHEMES: tuple[RhymeRule, ...] = (
    (("AABB", "Couplet"), "Couplets (AABB). Line 1-2 rhyme, 3-4 rhyme."),
    (("ABAB", "Alternate"), "Alternate (ABAB). Line 1-3 rhyme, 2-4 rhyme."),
    (("ABCB", "Ballad"), "Ballad (ABCB). Only line 2-4 rhyme."),
    (("ABBA", "Enclosed"), "Enclosed (ABBA). Line 1-4, 2-3 rhyme."),
    (("AAAA", "Monorhyme"), "Monorhyme (AAAA). All lines same rhyme."),
    (("AABA", "Rubaiyat"), "Rubaiyat (AABA). Lines 1, 2, and 4 rhyme. Line 3 is free."),
    (("AABCCB", "Sestet"), "Sestet (AABCCB). Line 1-2, 4-5 and 3-6 rhyme."),
    (("Terza",), "Chain Rhyme (ABA BCB)."),
    (("Limerick",), "AABBA structure."),
    (("Sanskrit", "Sloka", "Anushtubh"), "Anushtubh meter. 8 syllables per quarter verse."),
    (("Ghazal",), "Ghazal (AA BA CA). Radif and qaafiya on every second line."),
    (("Doha",), "Doha. Two-line couplet, 13+11 matra."),
    (("Pallavi", "Charanam"), "Pallavi refrain between charanam verses."),
    (("Internal Rhyme", "Hip-Hop Flow", "Rap Multi"), "Internal and multisyllabic rhymes within lines."),
    (("Free Verse", "No Rhyme", "Blank"), "Free verse. No strict rhyme."),
)


def describe_rhyme_scheme(scheme: str | None, condensed: bool = False) -> str:
    """Return the structural description for a rhyme scheme name.

    Args:
        scheme: Resolved rhyme scheme, e.g. "AABB (Couplets)" or "Ghazal".
        condensed: Use the short table the review pass works from.

    Returns:
        The first matching description, or a generic end-rhyme instruction.
    """
    table = CONDENSED_RHYME_SCHEMES if condensed else RHYME_SCHEMES
    if scheme:
        for keywords, description in table:
            if any(keyword in scheme for keyword in keywords):
                return description
    return DEFAULT_CONDENSED_DESCRIPTION if condensed else DEFAULT_RHYME_DESCRIPTION
