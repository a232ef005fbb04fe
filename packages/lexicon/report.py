"""
Ingestion report for a raw word list.

What this module does:
- Count raw lines, kept words, lines dropped as too short/blank, and
  duplicate lines collapsed by normalization.
- Compute SHA-256 of the raw text so survey manifests can pin the exact list.
- Return a machine-readable dict (for manifests) and a one-line summary.

Typical use:
    from packages.lexicon import inspect_lexicon, pretty_summary
    rep = inspect_lexicon(Path("data/words_alpha.txt").read_text(encoding="utf-8"))
    print(pretty_summary(rep))
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, asdict
from typing import Dict

from .io import MIN_WORD_LENGTH, normalize_word


@dataclass
class IngestReport:
    """Counts collected while normalizing a raw word list."""
    raw_lines: int       # lines in the raw text (trailing newline does not add one)
    kept: int            # unique words in the resulting lexicon
    too_short: int       # lines shorter than MIN_WORD_LENGTH after trimming (blank included)
    duplicates: int      # lines that normalized to an already-seen word
    sha256: str          # SHA-256 of the raw text (UTF-8)

    @property
    def usable(self) -> bool:
        return self.kept > 0


def inspect_lexicon(text: str) -> IngestReport:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines = lines[:-1]

    seen = set()
    too_short = 0
    duplicates = 0
    for raw in lines:
        w = normalize_word(raw)
        if len(w) < MIN_WORD_LENGTH:
            too_short += 1
        elif w in seen:
            duplicates += 1
        else:
            seen.add(w)

    return IngestReport(
        raw_lines=len(lines),
        kept=len(seen),
        too_short=too_short,
        duplicates=duplicates,
        sha256=hashlib.sha256(text.encode("utf-8")).hexdigest(),
    )


def as_dict(rep: IngestReport) -> Dict:
    """Dataclass -> plain dict (stable ordering)."""
    return asdict(rep)


def pretty_summary(rep: IngestReport) -> str:
    """
    Compact one-liner for console output.

    Example:
        words=370103 | lines=370105 (short=2, dup=0) | sha=abc123def456 | OK
    """
    status = "OK" if rep.usable else "EMPTY"
    return (
        f"words={rep.kept} | lines={rep.raw_lines} "
        f"(short={rep.too_short}, dup={rep.duplicates}) "
        f"| sha={rep.sha256[:12]} | {status}"
    )
