"""File-based persistence for route planning run artifacts."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "summary.json"
SCHEDULE_FILENAME = "schedule.csv"


def _slug(value: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]+", "-", value).strip("-") or "run"


class FileStorage:
    """Writes each planning run into its own directory under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "route_plan") -> Path:
        stem = f"{_slug(prefix)}_{datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%S%fZ')}"
        path = self.output_root / stem
        suffix = 1
        while True:
            try:
                path.mkdir(parents=True, exist_ok=False)
                return path
            except FileExistsError:
                suffix += 1
                path = self.output_root / f"{stem}_{suffix}"

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_csv(self, path: Path, content: str) -> None:
        # csv.DictWriter already emits \r\n; keep it untranslated.
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)

    def save_route_plan(self, summary: dict, schedule_csv: str, *, label: str | None = None) -> Path:
        """Store a plan's JSON summary and CSV records; returns the run directory."""
        run_dir = self.make_run_directory(prefix=f"route_plan_{label}" if label else "route_plan")
        self.write_json(run_dir / SUMMARY_FILENAME, summary)
        self.write_csv(run_dir / SCHEDULE_FILENAME, schedule_csv)
        logger.info(f"Route plan artifacts written to {run_dir}")
        return run_dir
