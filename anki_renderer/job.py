from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .utils import append_jsonl, ensure_dir, utc_now_iso, write_json


@dataclass
class JobPaths:
    job_dir: Path
    result_json: Path
    metrics_json: Path
    errors_jsonl: Path
    preview_html: Path


def job_paths(job_dir: str | Path) -> JobPaths:
    job_dir = Path(job_dir)
    return JobPaths(
        job_dir=job_dir,
        result_json=job_dir / "result.json",
        metrics_json=job_dir / "metrics.json",
        errors_jsonl=job_dir / "errors.jsonl",
        preview_html=job_dir / "preview.html",
    )


def create_job_dirs(workspace: str | Path, job_id: str) -> JobPaths:
    paths = job_paths(Path(workspace) / "jobs" / job_id)
    ensure_dir(paths.job_dir)
    return paths


def new_job_id(use_timeline: bool = True) -> str:
    """Generate a new job ID.

    Timeline format YYYY-MM-DD/HH-MM-SS__<shortid>, or a plain UUID when
    `use_timeline` is False.
    """
    if not use_timeline:
        return str(uuid.uuid4())

    now = datetime.now(timezone.utc)
    return f"{now.strftime('%Y-%m-%d')}/{now.strftime('%H-%M-%S')}__{uuid.uuid4().hex[:8]}"


def record_error(paths: JobPaths, note_index: int | None, stage: str, message: str) -> None:
    append_jsonl(paths.errors_jsonl, {"note_index": note_index, "stage": stage, "message": message})


def init_job_outputs(paths: JobPaths) -> None:
    # Always create output files, even if empty.
    write_json(paths.result_json, {"job": {}, "cards": []})
    write_json(
        paths.metrics_json,
        {
            "created_at": utc_now_iso(),
            "finished": False,
            "completed_at": None,
            "notes_total": 0,
            "notes_rendered": 0,
            "notes_failed": 0,
            "cards_total": 0,
            "cards_skipped_empty_front": 0,
            "notes_without_cloze": 0,
            "cards_by_template": {},
        },
    )
    paths.errors_jsonl.parent.mkdir(parents=True, exist_ok=True)
    paths.errors_jsonl.touch(exist_ok=True)
