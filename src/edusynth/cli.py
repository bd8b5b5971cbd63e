from __future__ import annotations

import argparse
import asyncio
import json
import logging
import time

from edusynth.config import Settings, get_settings
from edusynth.pipeline.note import NOTE_SECTIONS, AudienceLevel, StudyNote
from edusynth.service.generator import GenerateService
from edusynth.storage.credentials import CredentialStore
from edusynth.ui.controller import DemoController
from edusynth.ui.timer import Stopwatch

LEVELS = [level.value for level in AudienceLevel]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="edusynth", description="Generate structured study notes for a topic.")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate notes, live with an API key or as an offline sample.")
    generate.add_argument("topic", help="Topic to study.")
    generate.add_argument("--level", choices=LEVELS, default=AudienceLevel.COLLEGE.value)
    generate.add_argument(
        "--api-key",
        default=None,
        help="Gemini API key. Defaults to the remembered key, then GEMINI_API_KEY.",
    )
    remember = generate.add_mutually_exclusive_group()
    remember.add_argument("--remember", dest="remember", action="store_true", default=None, help="Save the key.")
    remember.add_argument("--forget", dest="remember", action="store_false", help="Do not keep the key on disk.")
    generate.add_argument("--json", action="store_true", help="Print the note as JSON.")
    generate.add_argument("--copy", choices=NOTE_SECTIONS, default=None, help="Copy one section to the clipboard.")

    sample = sub.add_parser("sample", help="Show the offline sample note.")
    sample.add_argument("topic", nargs="?", default="")
    sample.add_argument("--level", choices=LEVELS, default=AudienceLevel.COLLEGE.value)
    sample.add_argument("--json", action="store_true", help="Print the note as JSON.")

    sub.add_parser("clear-key", help="Forget the saved API key.")

    timer = sub.add_parser("timer", help="Run a study stopwatch.")
    timer.add_argument("seconds", type=int, help="How long to run before stopping.")

    return parser.parse_args(argv)


def render_markdown(topic: str, note: StudyNote) -> str:
    lines = [
        f"# {topic}",
        "",
        "## Summary",
        note.summary,
        "",
        "## Explanation",
        note.explanation,
        "",
        "## Key points",
        note.section_text("keyPoints"),
        "",
        "## Conclusion",
        note.conclusion,
    ]
    return "\n".join(lines)


def build_controller(settings: Settings) -> DemoController:
    return DemoController(
        service=GenerateService(settings=settings),
        store=CredentialStore(settings.credential_store_path),
    )


async def run_generate(args: argparse.Namespace, settings: Settings) -> int:
    controller = build_controller(settings)
    form = controller.initial_form()
    credential = args.api_key if args.api_key is not None else (form.credential or settings.gemini_api_key)
    remember = form.remember if args.remember is None else args.remember

    outcome = await controller.submit(args.topic, args.level, credential, remember)
    if outcome is None:
        print(f"[edusynth] {controller.status}")
        return 2

    if args.json:
        print(outcome.note.to_json())
    else:
        print(render_markdown(args.topic.strip(), outcome.note))
    print(f"[edusynth] {outcome.status}")

    if args.copy:
        controller.copy_section(args.copy)
        print(f"[edusynth] {args.copy}: {controller.status}")
    return 0


def run_sample(args: argparse.Namespace, settings: Settings) -> int:
    controller = build_controller(settings)
    note = controller.load_sample(args.topic, args.level)
    if args.json:
        print(json.dumps(note.as_dict(), ensure_ascii=False, indent=2))
    else:
        print(render_markdown(args.topic.strip() or "Photosynthesis", note))
    print(f"[edusynth] {controller.status}")
    return 0


def run_clear_key(settings: Settings) -> int:
    controller = build_controller(settings)
    controller.clear_saved_key()
    print(f"[edusynth] {controller.status}")
    return 0


def run_timer(seconds: int) -> int:
    stopwatch = Stopwatch()
    stopwatch.start()
    try:
        while stopwatch.elapsed_ms() < seconds * 1000:
            print(f"\r{stopwatch.render()}", end="", flush=True)
            time.sleep(0.25)
    except KeyboardInterrupt:
        pass
    finally:
        stopwatch.stop()
    print(f"\r{stopwatch.render()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == "generate":
        return asyncio.run(run_generate(args, settings))
    if args.command == "sample":
        return run_sample(args, settings)
    if args.command == "clear-key":
        return run_clear_key(settings)
    return run_timer(args.seconds)


if __name__ == "__main__":
    raise SystemExit(main())
