from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any

from .job import JobPaths
from .utils import utc_now_iso, write_json


@dataclass
class JobWriter:
    """Writes the final outputs of a render job.

    result.json gets the job header and every rendered card; metrics.json
    gets the run counters plus cards per template. Both are marked finished
    only here, so a crashed run leaves `finished: false` behind.
    """

    paths: JobPaths

    def write_final(
        self,
        job_meta: dict[str, Any],
        cards: list[dict[str, Any]],
        metrics: dict[str, Any],
    ) -> None:
        finished_at = utc_now_iso()
        per_template = Counter(str(c.get("template", "")) for c in cards)

        write_json(
            self.paths.result_json,
            {"job": {**job_meta, "finished": True, "completed_at": finished_at}, "cards": cards},
        )
        write_json(
            self.paths.metrics_json,
            {
                **metrics,
                "cards_by_template": dict(sorted(per_template.items())),
                "finished": True,
                "completed_at": finished_at,
            },
        )
