"""CLI entry point: generate one song's lyrics and style prompt."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

from lyricflow.agent.mock_provider import MOCK_API_KEY, MockProvider
from lyricflow.agent.orchestrator import run_lyric_generation_workflow
from lyricflow.config import API_KEY, MODEL_FAST, MODEL_QUALITY, USER_HQ_TAGS
from lyricflow.errors import LyricflowError
from lyricflow.models.settings import AUTO_OPTION, GenerationSettings, LanguageProfile
from lyricflow.models.workflow import GenerationStep

log = logging.getLogger(__name__)

CUSTOMIZABLE_FIELDS = ("theme", "mood", "style", "singer-config", "rhyme-scheme")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate culturally grounded song lyrics with a multi-agent pipeline."
    )
    parser.add_argument(
        "--text", "-t",
        type=str,
        required=True,
        help="Description of the song to write.",
    )
    parser.add_argument("--language", "-l", type=str, default="Telugu", help="Primary language.")
    parser.add_argument("--secondary", type=str, default="", help="Fusion language (default: primary).")
    parser.add_argument("--tertiary", type=str, default="", help="Second fusion language (default: primary).")
    parser.add_argument("--ceremony", type=str, default="", help="Scenario id, e.g. sangeet or hero_entry.")
    parser.add_argument("--category", type=str, default="", help="Scenario category id.")
    for name in ("theme", "mood", "style", "singer-config", "rhyme-scheme", "complexity"):
        parser.add_argument(
            f"--{name}",
            type=str,
            default=AUTO_OPTION,
            help=f"{name.replace('-', ' ').capitalize()} (default: Auto).",
        )
    for name in CUSTOMIZABLE_FIELDS:
        parser.add_argument(
            f"--custom-{name}",
            type=str,
            default="",
            help=f"Value used when --{name} is Custom.",
        )
    parser.add_argument(
        "--hq-tags",
        type=str,
        default=None,
        help="Comma-separated HQ tags appended to the style prompt.",
    )
    parser.add_argument(
        "--temperature",
        choices=["precise", "balanced", "creative"],
        default="balanced",
        help="Shift every agent's sampling temperature.",
    )
    parser.add_argument("--fast-model", type=str, default=MODEL_FAST, help=f"Default: {MODEL_FAST}.")
    parser.add_argument("--quality-model", type=str, default=MODEL_QUALITY, help=f"Default: {MODEL_QUALITY}.")
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use canned responses instead of calling the provider.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log agent steps to stderr.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log full debug trace of prompts, settings and output.",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory (default: outputs/YYYY-MM-DD/HH-MM-SS).",
    )
    return parser.parse_args(argv)


def setup_output_dir(custom_dir: str | None = None) -> Path:
    """Create output directory with timestamp."""
    if custom_dir:
        output_dir = Path(custom_dir)
    else:
        now = datetime.now()
        output_dir = Path("outputs") / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")

    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def setup_logging(output_dir: Path, verbose: bool = False, debug: bool = False) -> None:
    """Setup logging to both console and file."""
    log_level = logging.DEBUG if (verbose or debug) else logging.INFO
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(output_dir / "execution.log")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)


def build_inputs(args: argparse.Namespace) -> tuple[LanguageProfile, GenerationSettings]:
    profile = LanguageProfile(primary=args.language, secondary=args.secondary, tertiary=args.tertiary)
    settings = GenerationSettings(
        category=args.category,
        ceremony=args.ceremony,
        theme=args.theme,
        custom_theme=args.custom_theme,
        mood=args.mood,
        custom_mood=args.custom_mood,
        style=args.style,
        custom_style=args.custom_style,
        singer_config=args.singer_config,
        custom_singer_config=args.custom_singer_config,
        rhyme_scheme=args.rhyme_scheme,
        custom_rhyme_scheme=args.custom_rhyme_scheme,
        complexity=args.complexity,
    )
    return profile, settings


def print_progress(step: GenerationStep) -> None:
    print(f"[{step.progress:3d}%] {step.message}", file=sys.stderr)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    output_dir = setup_output_dir(args.output_dir)
    setup_logging(output_dir, args.verbose, args.debug)

    start_time = time.time()
    start_datetime = datetime.now().isoformat()
    profile, settings = build_inputs(args)
    hq_tags = [t.strip() for t in args.hq_tags.split(",") if t.strip()] if args.hq_tags else USER_HQ_TAGS

    log.info("=" * 80)
    log.info("Starting lyric generation")
    log.info("Execution Parameters:")
    log.info("  - Timestamp: %s", start_datetime)
    log.info("  - Language: %s / %s / %s", profile.primary, profile.secondary, profile.tertiary)
    log.info("  - Ceremony: %s", settings.ceremony or "<none>")
    log.info("  - Models: fast=%s quality=%s", args.fast_model, args.quality_model)
    log.info("  - Mock provider: %s", args.mock)
    log.info("  - Output directory: %s", output_dir)
    log.info("=" * 80)

    options: dict = {}
    credentials = API_KEY
    if args.mock:
        credentials = MOCK_API_KEY
        options = {"provider": MockProvider(), "search": None, "rate_limit_delay": 0.0}

    try:
        result = await run_lyric_generation_workflow(
            args.text,
            profile,
            settings,
            credentials,
            print_progress,
            custom_hq_tags=hq_tags or None,
            temperature_preference=args.temperature,
            fast_model=args.fast_model,
            quality_model=args.quality_model,
            debug=args.debug,
            **options,
        )
    except LyricflowError as e:
        log.error("Generation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    elapsed_time = time.time() - start_time
    log.info("=" * 80)
    log.info("Execution completed successfully in %.2fs", elapsed_time)
    log.info("=" * 80)

    output_file = output_dir / "result.json"
    output_file.write_text(result.model_dump_json(indent=2, by_alias=True))
    log.info("Result saved to %s", output_file)

    params_file = output_dir / "params.json"
    params = {
        "timestamp": start_datetime,
        "text": args.text,
        "language": profile.to_wire(),
        "settings": settings.to_wire(),
        "hq_tags": hq_tags,
        "temperature": args.temperature,
        "fast_model": args.fast_model,
        "quality_model": args.quality_model,
        "mock": args.mock,
        "runtime_seconds": elapsed_time,
    }
    params_file.write_text(json.dumps(params, indent=2, ensure_ascii=False))
    log.info("Parameters saved to %s", params_file)

    print(result.lyrics)
    print()
    print(f"Style: {result.style_prompt}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
