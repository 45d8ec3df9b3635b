from __future__ import annotations

import argparse
import json
from pathlib import Path

from . import __version__
from .api import parse_fields_json
from .cloze import count_ordinals
from .config import build_renderer, load_config
from .deck import load_deck
from .errors import RenderError
from .exporters.apkg import export_apkg
from .job import create_job_dirs, init_job_outputs, new_job_id
from .pipeline import RenderPipeline, RunOptions
from .preview import generate_preview_html
from .styles import build_css, wrap_with_styles
from .utils import load_json
from .validator import validate_deck

DEFAULT_CONFIG = str(Path("config") / "default.json")


def _read_text_arg(value: str) -> str:
    """`@path` reads the file; anything else is taken literally."""
    if value.startswith("@"):
        return Path(value[1:]).read_text(encoding="utf-8")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="anki_renderer")
    p.add_argument("--config", default=DEFAULT_CONFIG, help="Config path")
    sub = p.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render one card (front + back)")
    render.add_argument("--front", required=True, help="Front template (or @file)")
    render.add_argument("--back", default="", help="Back template (or @file)")
    render.add_argument("--fields", required=True, help="Fields as a JSON object (or @file)")
    render.add_argument("--ordinal", type=int, default=0, help="Cloze ordinal (0 = not a cloze card)")
    render.add_argument("--styled", action="store_true", help="Wrap each side in a styled .card div")

    cc = sub.add_parser("count-cloze", help="Count the cloze cards a field value generates")
    cc.add_argument("content", help="Field content (or @file)")

    run = sub.add_parser("run", help="Render every card of a deck file into a job directory")
    run.add_argument("--deck", required=True, help="Deck file (JSON)")
    run.add_argument("--workspace", default="./workspace", help="Workspace root")
    run.add_argument("--preview", action="store_true", help="Also write preview.html")

    validate = sub.add_parser("validate", help="Validate a deck file's templates and notes")
    validate.add_argument("--deck", required=True, help="Deck file (JSON)")

    preview = sub.add_parser("preview", help="Write a preview page from a job's result.json")
    preview.add_argument("--job-dir", required=True, help="Job directory (workspace/jobs/<job_id>)")
    preview.add_argument("--out", default=None, help="Output file path (default: <job-dir>/preview.html)")
    preview.add_argument("--night-mode", action="store_true")

    export = sub.add_parser("export", help="Export a deck file as an Anki package")
    export.add_argument("--deck", required=True, help="Deck file (JSON)")
    export.add_argument("--out", required=True, help="Output .apkg path")
    export.add_argument("--deck-name", default=None, help="Override the deck name")
    export.add_argument("--tags", default=None, help="Comma-separated tags added to every note")

    sub.add_parser("version", help="Print the renderer version")

    return p


def cmd_render(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
        renderer = build_renderer(cfg)
        fields = parse_fields_json(_read_text_arg(args.fields))
        result = renderer.render(_read_text_arg(args.front), _read_text_arg(args.back), fields, args.ordinal)
    except (RenderError, ValueError, OSError) as e:
        print(f"render_failed: {e}")
        return 1

    out = result.to_dict()
    if args.styled:
        css = build_css(
            include_default_styles=bool(cfg.preview.get("include_default_styles", True)),
            night_mode=bool(cfg.preview.get("night_mode", False)),
            css=str(cfg.preview.get("css") or ""),
        )
        night = bool(cfg.preview.get("night_mode", False))
        out = {k: wrap_with_styles(v, css, night) for k, v in out.items()}
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


def cmd_count_cloze(args: argparse.Namespace) -> int:
    print(count_ordinals(_read_text_arg(args.content)))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"run_failed: invalid config: {e}")
        return 1

    job_id = new_job_id()
    paths = create_job_dirs(args.workspace, job_id)
    init_job_outputs(paths)

    opts = RunOptions(deck_path=args.deck, preview=bool(args.preview))
    try:
        metrics = RenderPipeline(paths=paths, cfg=cfg, opts=opts).run(job_id=job_id)
    except (RenderError, OSError) as e:
        print(f"run_failed: {e}")
        return 1

    print(
        f"notes={metrics['notes_total']} rendered={metrics['notes_rendered']} failed={metrics['notes_failed']} "
        f"cards={metrics['cards_total']} skipped_empty_front={metrics['cards_skipped_empty_front']}"
    )
    print(str(paths.job_dir))
    return 0 if metrics["notes_failed"] == 0 else 1


def cmd_validate(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"invalid config: {e}")
        return 1
    try:
        deck = load_deck(args.deck)
    except (RenderError, OSError) as e:
        print(f"invalid deck file: {e}")
        return 1

    errors = validate_deck(deck, strict_filters=cfg.strict_filters)
    print(f"notes={len(deck.notes)}")
    print(f"templates={len(deck.note_type.templates)}")
    print(f"problems={len(errors)}")
    if errors:
        for m in errors:
            print(m)
        return 1

    print("OK")
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    job_dir = Path(args.job_dir)
    try:
        cfg = load_config(args.config)
        result = load_json(job_dir / "result.json")
    except (OSError, ValueError) as e:
        print(f"preview_failed: {e}")
        return 1

    cards = result.get("cards", []) if isinstance(result, dict) else []
    job = result.get("job", {}) if isinstance(result, dict) else {}
    out = Path(args.out) if args.out else job_dir / "preview.html"
    generate_preview_html(
        [c for c in cards if isinstance(c, dict)],
        out,
        title=str(job.get("deck") or "Card Preview"),
        include_default_styles=bool(cfg.preview.get("include_default_styles", True)),
        night_mode=bool(args.night_mode or cfg.preview.get("night_mode", False)),
        css=str(cfg.preview.get("css") or ""),
    )
    print(f"cards={len(cards)}")
    print(str(out))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
        deck = load_deck(args.deck)
        stats = export_apkg(
            deck,
            args.out,
            deck_name=args.deck_name or cfg.export.get("deck_name"),
            tags=args.tags if args.tags is not None else cfg.export.get("tags"),
            strict_filters=cfg.strict_filters,
        )
        print(f"exported={stats.notes_exported} skipped_no_cloze={stats.notes_skipped_no_cloze} deck={stats.deck_name}")
        return 0
    except (RenderError, RuntimeError, OSError, ValueError) as e:
        print(f"export_failed: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "version":
        print(__version__)
        return 0

    if args.command == "render":
        return cmd_render(args)

    if args.command == "count-cloze":
        return cmd_count_cloze(args)

    if args.command == "run":
        return cmd_run(args)

    if args.command == "validate":
        return cmd_validate(args)

    if args.command == "preview":
        return cmd_preview(args)

    if args.command == "export":
        return cmd_export(args)

    raise SystemExit(2)


if __name__ == "__main__":
    raise SystemExit(main())
