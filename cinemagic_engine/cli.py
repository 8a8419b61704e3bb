"""Cinemagic CLI entrypoints."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .engine import CinemagicEngine
from .errors import MissingCredential
from .images import ImagePayload, parse_data_uri
from .looks.catalog import DEFAULT_LOOK_ID, LookId, get_look, list_looks
from .prompts.composer import compose_instruction
from .prompts.scene import SceneDetails
from .providers import default_client
from .utils import getenv_flag, getenv_language, load_dotenv

_EXIT_COMMANDS = {"/exit", "/quit", "exit", "quit"}


def _add_scene_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--character", default="")
    parser.add_argument("--clothing", default="")
    parser.add_argument("--action", default="")
    parser.add_argument("--setting", default="")


def _add_session_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--events", help="Path to events.jsonl")
    parser.add_argument("--lang", choices=("en", "es"), default=None)
    parser.add_argument("--dryrun", action="store_true", help="Use the offline client")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cinemagic", description="Cinematic look transforms with Gemini")
    sub = parser.add_subparsers(dest="command")

    looks = sub.add_parser("looks", help="List available looks")
    looks.add_argument("--lang", choices=("en", "es"), default=None)

    look_choices = [look_id.value for look_id in LookId]

    compose = sub.add_parser("compose", help="Print the instruction a transform would send")
    compose.add_argument("--look", choices=look_choices, default=DEFAULT_LOOK_ID.value)
    compose.add_argument("--instructions", default="")
    _add_scene_arguments(compose)

    transform = sub.add_parser("transform", help="Transform an image into a cinematic still")
    transform.add_argument("--image", required=True, help="Source image path or data URI")
    transform.add_argument("--look", choices=look_choices, default=DEFAULT_LOOK_ID.value)
    transform.add_argument("--reference", help="Reference image path (Reference Match look)")
    transform.add_argument("--instructions", default="")
    transform.add_argument("--enhance", action="store_true", help="Enhance scene fields with the text model first")
    transform.add_argument("--format", choices=("png", "jpg"), default="png")
    transform.add_argument("--out", required=True, help="Output directory")
    _add_scene_arguments(transform)
    _add_session_arguments(transform)

    enhance = sub.add_parser("enhance", help="Expand scene fields into a cinematic description")
    _add_scene_arguments(enhance)
    _add_session_arguments(enhance)

    chat = sub.add_parser("chat", help="Interactive cinematography assistant")
    _add_session_arguments(chat)
    return parser


def _scene_from_args(args: argparse.Namespace) -> SceneDetails:
    return SceneDetails(
        character=args.character,
        clothing=args.clothing,
        action=args.action,
        setting=args.setting,
    )


def _load_image(value: str) -> ImagePayload:
    if value.startswith("data:"):
        return parse_data_uri(value)
    return ImagePayload.from_path(value)


def _engine_from_args(args: argparse.Namespace) -> CinemagicEngine:
    language = args.lang or getenv_language()
    dryrun = bool(args.dryrun) or getenv_flag("CINEMAGIC_DRYRUN", False)
    events_path = Path(args.events) if args.events else None
    client = default_client(dryrun=dryrun)
    return CinemagicEngine(events_path, client=client, language=language)


def _handle_looks(args: argparse.Namespace) -> int:
    language = args.lang or getenv_language()
    for look in list_looks():
        print(f"{look.look_id.value:<18} {look.display_name(language)}")
        print(f"{'':<18} {look.display_description(language)}")
    return 0


def _handle_compose(args: argparse.Namespace) -> int:
    look = get_look(args.look)
    print(compose_instruction(look.look_id, args.instructions, _scene_from_args(args), reference_mode=look.is_reference))
    return 0


def _handle_transform(args: argparse.Namespace) -> int:
    engine = _engine_from_args(args)
    source = _load_image(args.image)
    reference = _load_image(args.reference) if args.reference else None
    scene = _scene_from_args(args)
    instructions = args.instructions
    if args.enhance and not instructions.strip():
        enhanced = engine.enhance(scene)
        if enhanced.error:
            print(enhanced.error, file=sys.stderr)
            return 1
        instructions = enhanced.prompt or ""
        print(f"Enhanced prompt: {instructions}")
    outcome = engine.transform(source, args.look, instructions, reference, scene=scene)
    if not outcome.ok:
        print(outcome.error, file=sys.stderr)
        return 1
    path = engine.export(args.format, Path(args.out))
    print(f"{outcome.look.display_name(engine.language)} // ARRI RAW // x2 Upscale")
    print(f"Saved {path}")
    return 0


def _handle_enhance(args: argparse.Namespace) -> int:
    engine = _engine_from_args(args)
    outcome = engine.enhance(_scene_from_args(args))
    if outcome.error:
        print(outcome.error, file=sys.stderr)
        return 1
    print(outcome.prompt)
    return 0


def _handle_chat(args: argparse.Namespace) -> int:
    engine = _engine_from_args(args)
    print(engine.transcript.turns[0].text)
    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if line.strip().lower() in _EXIT_COMMANDS:
            break
        turn = engine.chat(line)
        if turn is not None:
            print(turn.text)
    return 0


def main() -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args()
    try:
        code = _dispatch(args)
    except MissingCredential as exc:
        print(f"Missing credential: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    if code is None:
        parser.print_help()
        raise SystemExit(1)
    raise SystemExit(code)


def _dispatch(args: argparse.Namespace) -> int | None:
    if args.command == "looks":
        return _handle_looks(args)
    if args.command == "compose":
        return _handle_compose(args)
    if args.command == "transform":
        return _handle_transform(args)
    if args.command == "enhance":
        return _handle_enhance(args)
    if args.command == "chat":
        return _handle_chat(args)
    return None


if __name__ == "__main__":
    main()
