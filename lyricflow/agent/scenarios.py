"""Static scenario knowledge base: ceremonies and film situations with their default
creative configuration and a one-line cultural context for the lyricist.

Read-only. Loaded once at import time.
"""

from __future__ import annotations

import logging

from lyricflow.models.scenario import ScenarioCategory, ScenarioEvent
from lyricflow.models.settings import Auto, GenerationSettings, classify_choice

log = logging.getLogger(__name__)

INDIAN_LANGUAGES = (
    "Assamese", "Bengali", "Bodo", "Dogri", "English", "Gujarati", "Hindi",
    "Kannada", "Kashmiri", "Konkani", "Maithili", "Malayalam", "Manipuri",
    "Marathi", "Nepali", "Odia", "Punjabi", "Sanskrit", "Santali",
    "Sindhi", "Tamil", "Telugu", "Urdu",
)


def _event(
    id: str,
    label: str,
    mood: str,
    style: str,
    complexity: str,
    rhyme: str,
    singer: str,
    context: str,
) -> ScenarioEvent:
    return ScenarioEvent(
        id=id,
        label=label,
        default_mood=mood,
        default_style=style,
        default_complexity=complexity,
        default_rhyme=rhyme,
        default_singer=singer,
        prompt_context=context,
    )


SCENARIO_KNOWLEDGE_BASE: tuple[ScenarioCategory, ...] = (
    ScenarioCategory(
        id="birth_child",
        label="Birth & Child Ceremonies",
        events=(
            _event("namakarana", "Namakarana (Naming)", "Joyful", "Classical", "Simple", "AABB", "Chorus",
                   "Naming the newborn, blessings, whispering name, family joy"),
            _event("annaprashana", "Annaprashana (First Food)", "Festive", "Folk", "Simple", "AABB", "Female Solo",
                   "First solid food feeding, maternal love, playful baby"),
            _event("seemantham", "Seemantham (Baby Shower)", "Devotional", "Classical", "Moderate", "AABB", "Chorus",
                   "Blessing pregnant mother, bangles ceremony, safe delivery prayers"),
            _event("vidyarambham", "Vidyarambham (Learning)", "Spiritual", "Classical", "Moderate", "Sanskrit Slokas",
                   "Male Solo", "Initiation of learning, writing on rice/sand, Saraswati puja"),
            _event("upanayana", "Upanayana (Thread Ceremony)", "Spiritual", "Vedic Chant", "Complex", "Free Verse",
                   "Male Solo", "Sacred thread ceremony, gayatri mantra, father-son bond, spiritual birth"),
        ),
    ),
    ScenarioCategory(
        id="wedding",
        label="Wedding & Related Functions",
        events=(
            _event("roka", "Roka / Engagement", "Joyful", "Pop", "Simple", "AABB", "Duet",
                   "Formal announcement, ring exchange, union of families"),
            _event("sagai", "Sagai (Ring Ceremony)", "Romantic", "Melody", "Simple", "ABAB", "Duet",
                   "Formal engagement, ring exchange, promises, family blessings"),
            _event("mehendi", "Mehendi", "Festive", "Folk", "Simple", "AABB", "Female Solo",
                   "Henna application, intricate designs, bride's beauty, teasing songs"),
            _event("sangeet", "Sangeet", "Energetic", "Bollywood", "Moderate", "AABB", "Duet",
                   "Music and dance night, family performances, high energy celebration"),
            _event("haldi", "Haldi / Pellikuthuru", "Playful", "Folk", "Simple", "AABB", "Chorus",
                   "Turmeric ceremony, cleansing, yellow theme, playful splashing"),
            _event("baraat", "Baraat (Groom's Procession)", "Energetic", "Bhangra", "Simple", "AABB", "Male Solo",
                   "Groom's arrival, dancing on streets, horse/car, grand entry"),
            _event("varmala", "Varmala / Jaimala", "Romantic", "Cinematic", "Moderate", "ABAB", "Duet",
                   "Garland exchange, playful lifting, first union moment, cheers"),
            _event("kanyadaan", "Kanyadaan", "Emotional", "Classical", "Complex", "Free Verse", "Male Solo",
                   "Father giving away daughter, tearful moment, sacred duty, blessings"),
            _event("saat_phere", "Saat Phere (Seven Vows)", "Spiritual", "Vedic Chant", "Complex", "Sanskrit Slokas",
                   "Chorus", "Seven circles around fire, sacred vows, eternal promises, divine witness"),
            _event("vidaai", "Vidaai (Bride's Farewell)", "Melancholic", "Melody", "Moderate", "ABCB", "Female Solo",
                   "Bride leaving home, throwing rice, crying, emotional goodbye"),
            _event("reception", "Reception", "Romantic", "Jazz", "Simple", "ABAB", "Duet",
                   "Post-wedding party, meeting guests, couple's first dance, celebrations"),
        ),
    ),
    ScenarioCategory(
        id="milestone",
        label="Age & Milestone Ceremonies",
        events=(
            _event("sashti_poorti", "Sashti Poorti (60th)", "Gratitude", "Classical", "Moderate", "AABB", "Chorus",
                   "60th birthday, renewal of vows, family gathering, gratitude for life"),
            _event("retirement", "Retirement", "Nostalgic", "Melody", "Simple", "ABAB", "Male Solo",
                   "End of career, new freedom, looking back at service, relaxation"),
            _event("anniversary", "Anniversary (Silver/Golden)", "Romantic", "Melody", "Simple", "ABAB", "Duet",
                   "Celebrating years of togetherness, enduring love, memories"),
            _event("housewarming", "Housewarming (Griha Pravesh)", "Joyful", "Classical", "Simple", "AABB", "Chorus",
                   "New home, prosperity, welcoming guests, new chapter"),
        ),
    ),
    ScenarioCategory(
        id="religious_festival",
        label="Religious & Festival Events",
        events=(
            _event("satyanarayana", "Satyanarayana Puja", "Devotional", "Bhajan", "Moderate", "AABB", "Chorus",
                   "Family puja, story of Lord Satyanarayana, prasad, blessings"),
            _event("diwali", "Diwali / Deepavali", "Festive", "Pop", "Simple", "AABB", "Chorus",
                   "Festival of lights, victory of good, crackers, sweets, Lakshmi puja, diyas"),
            _event("holi", "Holi", "Playful", "Folk", "Simple", "AABB", "Duet",
                   "Festival of colors, Radha-Krishna love, spring, fun, frolic, gulal"),
            _event("navratri", "Navratri / Durga Puja", "Energetic", "Garba", "Moderate", "AABB", "Chorus",
                   "Nine nights, Goddess Durga, Garba/Dandiya dance, victory over evil, fasting"),
            _event("ganesh_chaturthi", "Ganesh Chaturthi", "Energetic", "Devotional", "Simple", "AABB", "Chorus",
                   "Lord Ganesha festival, Ganpati Bappa Morya, immersion, modak, procession"),
            _event("pongal", "Pongal / Makar Sankranti", "Festive", "Folk", "Simple", "AABB", "Chorus",
                   "Harvest festival, Sun god, kites, sugarcane, prosperity, gratitude"),
            _event("onam", "Onam", "Traditional", "Folk", "Simple", "AABB", "Chorus",
                   "Kerala harvest festival, King Mahabali, boat race, pookalam, sadya feast"),
            _event("raksha_bandhan", "Raksha Bandhan", "Sentimental", "Melody", "Simple", "AABB", "Duet",
                   "Brother-sister bond, tying rakhi, promise of protection, love, gifts"),
            _event("bihu", "Bihu", "Energetic", "Folk", "Simple", "AABB", "Chorus",
                   "Assamese New Year, harvest, dance, dhol, spring, youth, celebration"),
            _event("eid_ul_fitr", "Eid-ul-Fitr", "Festive", "Sufi", "Moderate", "AABB", "Male Solo",
                   "End of Ramadan, brotherhood, feast, moon sighting, gratitude, sevaiyan"),
            _event("christmas", "Christmas", "Joyful", "Carol", "Simple", "AABB", "Chorus",
                   "Birth of Jesus, Santa Claus, gifts, peace, joy, winter, star, nativity"),
            _event("buddha_purnima", "Buddha Purnima / Vesak", "Peaceful", "Chant", "Moderate", "Free Verse", "Chorus",
                   "Buddha's birth, enlightenment, nirvana, peace, meditation, lotus, dharma"),
        ),
    ),
    ScenarioCategory(
        id="gods",
        label="Gods & Deities (Devotional)",
        events=(
            _event("ganesha", "Lord Ganesha", "Devotional", "Classical", "Simple", "AABB", "Chorus",
                   "Remover of obstacles, elephant-headed god, wisdom, new beginnings"),
            _event("shiva", "Lord Shiva", "Powerful", "Damru/Tandav", "Complex", "Free Verse", "Male Solo",
                   "Destroyer, ascetic, Kailash, Ganga, Om Namah Shivaya, power"),
            _event("hanuman", "Lord Hanuman", "Devotional", "Chant", "Simple", "AABB", "Male Solo",
                   "Strength, devotion to Rama, Bajrangbali, courage, service"),
        ),
    ),
    ScenarioCategory(
        id="film",
        label="Film Situations",
        events=(
            _event("hero_entry", "Mass Hero Entry", "Energetic", "Tollywood Mass", "Moderate", "AABB", "Male Solo",
                   "Protagonist introduction, power, swagger, slow-motion walk, mass appeal, Dappankuthu beats"),
            _event("love_montage", "Love Montage", "Romantic", "Cinematic", "Simple", "ABAB", "Duet",
                   "Falling in love sequence, visual storytelling, soft melody, scenic locations"),
            _event("rain_song", "Rain Song", "Romantic", "Cinematic", "Simple", "AABB", "Duet",
                   "Dancing in rain, getting wet, sensual, chemistry, romantic tension"),
            _event("mother_sentiment", "Mother Sentiment", "Emotional", "Classical", "Moderate", "AABB", "Female Solo",
                   "Mother's love, sacrifice, emotional flashback, tears, gratitude"),
            _event("friendship_song", "Friendship Anthem", "Joyful", "Pop", "Simple", "AABB", "Chorus",
                   "Brotherhood, loyalty, group of friends, fun moments, bond"),
            _event("separation_sad", "Sad Separation", "Melancholic", "Melody", "Moderate", "ABCB", "Male Solo",
                   "Loss, death, departure, grief, loneliness, mourning"),
            _event("motivational_anthem", "Motivational Anthem", "Hopeful", "Rock", "Moderate", "AABB", "Male Solo",
                   "Overcoming odds, never give up, rise again, inspiration, dreams"),
        ),
    ),
    ScenarioCategory(
        id="romance",
        label="Romance Situations",
        events=(
            _event("first_meeting", "First Meeting", "Whimsical", "Pop", "Simple", "ABCB", "Male Solo",
                   "Love at first sight, butterflies, hesitation"),
            _event("soup_song", "Soup Song (Heartbreak)", "Heartbroken", "Folk", "Simple", "AABB", "Male Solo",
                   "Love failure, self-pity mixed with humor, alcohol references"),
            _event("long_distance", "Long Distance", "Nostalgic", "Lofi", "Moderate", "Free Verse", "Duet",
                   "Missing each other, video calls, waiting"),
        ),
    ),
    ScenarioCategory(
        id="modern",
        label="Modern / Urban",
        events=(
            _event("club_anthem", "Club Anthem", "Energetic", "EDM", "Simple", "AABB", "Female Solo",
                   "Nightlife, dancing, bass drop, repetitive hooks"),
            _event("road_trip", "Road Trip", "Chill", "Pop", "Simple", "ABAB", "Duet",
                   "Driving, wind in hair, freedom, adventure"),
        ),
    ),
)

_EVENTS_BY_ID: dict[str, ScenarioEvent] = {
    event.id: event for category in SCENARIO_KNOWLEDGE_BASE for event in category.events
}


def find_scenario(ceremony_id: str | None) -> ScenarioEvent | None:
    """Look up a scenario by id. Unknown, empty and "None" ids return None."""
    if not ceremony_id:
        return None
    return _EVENTS_BY_ID.get(ceremony_id)


def list_categories() -> tuple[ScenarioCategory, ...]:
    return SCENARIO_KNOWLEDGE_BASE


def apply_ceremony_defaults(settings: GenerationSettings) -> GenerationSettings:
    """Seed Auto/empty fields from the selected scenario's defaults.

    Fields the user set explicitly, including "Custom", are left alone. Without a
    known ceremony the settings come back unchanged.
    """
    scenario = find_scenario(settings.ceremony) if settings.has_ceremony else None
    if scenario is None:
        return settings

    defaults = {
        "mood": scenario.default_mood,
        "style": scenario.default_style,
        "rhyme_scheme": scenario.default_rhyme,
        "singer_config": scenario.default_singer,
        "complexity": scenario.default_complexity,
    }
    updates = {
        field: value
        for field, value in defaults.items()
        if isinstance(classify_choice(getattr(settings, field)), Auto)
    }
    if updates:
        log.info("Seeded %s from scenario '%s'", ", ".join(sorted(updates)), scenario.id)
    return settings.model_copy(update=updates)
