"""
I/O utilities for survey runs.

Responsibilities:
- write_csv:      dump row dicts (survey tiers or playouts) to a CSV file.
- write_manifest: dump a JSON manifest with config, lexicon hash and summary.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.
"""

from __future__ import annotations

import csv
import datetime as dt
import json
import subprocess
from pathlib import Path
from typing import Dict, List, Sequence


def write_csv(rows: List[Dict], path: str, fields: Sequence[str] | None = None) -> str:
    """
    Serialize rows to CSV. Columns default to the keys of the first row,
    in order; later rows may omit keys (written as empty cells).

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if fields is None:
        fields = list(rows[0].keys()) if rows else []

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(fields), restval="", extrasaction="ignore")
        w.writeheader()
        for r in rows:
            w.writerow(r)

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest.

    Typical keys:
      - run_id, git_commit
      - config: CLI args
      - lexicon: output of lexicon.report.as_dict(...)
      - tiers: survey rows
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, default=str)
    return str(p)


def timestamp_id() -> str:
    """
    Compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
