from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .cards import render_note
from .config import RendererConfig, build_renderer
from .deck import Deck, load_deck
from .errors import ParseError, RenderError
from .job import JobPaths, record_error
from .preview import generate_preview_html
from .utils import utc_now_iso
from .writer import JobWriter


@dataclass
class RunOptions:
    deck_path: str
    preview: bool = False


class RenderPipeline:
    def __init__(self, paths: JobPaths, cfg: RendererConfig, opts: RunOptions):
        self.paths = paths
        self.cfg = cfg
        self.opts = opts
        self.renderer = build_renderer(cfg)
        self.writer = JobWriter(paths=paths)

    def _check_templates(self, deck: Deck) -> bool:
        ok = True
        for t in deck.note_type.templates:
            for side, text in (("front", t.front), ("back", t.back)):
                try:
                    self.renderer.parse(text)
                except ParseError as e:
                    e.side = side
                    record_error(self.paths, note_index=None, stage="template", message=f"{t.name}: {e}")
                    ok = False
        return ok

    def run(self, job_id: str) -> dict[str, Any]:
        deck = load_deck(self.opts.deck_path)
        cards: list[dict[str, Any]] = []

        metrics: dict[str, Any] = {
            "created_at": utc_now_iso(),
            "notes_total": len(deck.notes),
            "notes_rendered": 0,
            "notes_failed": 0,
            "cards_total": 0,
            "cards_skipped_empty_front": 0,
            "notes_without_cloze": 0,
        }

        job_meta = {
            "job_id": job_id,
            "deck": deck.name,
            "note_type": deck.note_type.name,
            "kind": deck.note_type.kind,
            "input": {"path": self.opts.deck_path},
            "created_at": metrics["created_at"],
        }

        if not self._check_templates(deck):
            metrics["notes_failed"] = len(deck.notes)
            self.writer.write_final(job_meta=job_meta, cards=cards, metrics=metrics)
            return metrics

        for idx in range(len(deck.notes)):
            try:
                rendered = render_note(deck, idx, self.renderer)
            except RenderError as e:
                record_error(self.paths, note_index=idx, stage="render", message=str(e))
                metrics["notes_failed"] += 1
                continue

            if rendered.skipped_no_cloze:
                record_error(self.paths, note_index=idx, stage="cloze", message="no_cloze_ordinals")
            metrics["notes_rendered"] += 1
            metrics["cards_skipped_empty_front"] += rendered.skipped_empty_front
            metrics["notes_without_cloze"] += rendered.skipped_no_cloze
            cards.extend(c.to_dict() for c in rendered.cards)

        metrics["cards_total"] = len(cards)

        if self.opts.preview:
            generate_preview_html(
                cards,
                self.paths.preview_html,
                title=deck.name,
                note_css=deck.note_type.css,
                include_default_styles=bool(self.cfg.preview.get("include_default_styles", True)),
                night_mode=bool(self.cfg.preview.get("night_mode", False)),
                css=str(self.cfg.preview.get("css") or ""),
            )

        self.writer.write_final(job_meta=job_meta, cards=cards, metrics=metrics)
        return metrics
