"""
Difficulty tiers.

A tier combines:
  - min_words    : feasibility threshold; a fragment is eligible only if its
                   index entry count (duplicates included) is >= min_words
  - turn_seconds : how long the player has per turn

Higher thresholds only restrict WHICH fragments can come up; selection among
the eligible ones stays uniform (see selector.py).

Tiers are plain data. The built-in set can be replaced from a JSON file:

    {
      "easy":   {"name": "Easy",   "min_words": 500, "turn_seconds": 10},
      "expert": {"name": "Expert", "min_words": 1,   "turn_seconds": 5}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping

DEFAULT_DIFFICULTY = "easy"


@dataclass(frozen=True)
class DifficultyProfile:
    key: str
    name: str
    min_words: int
    turn_seconds: float

    def __post_init__(self):
        if int(self.min_words) < 1:
            raise ValueError(f"{self.key}: min_words must be >= 1; got {self.min_words}")
        if not float(self.turn_seconds) > 0:
            raise ValueError(f"{self.key}: turn_seconds must be > 0; got {self.turn_seconds}")


# ---- Built-in registry (insertion order = menu order) ----
DIFFICULTIES: Dict[str, DifficultyProfile] = {
    "easy": DifficultyProfile("easy", "Easy", min_words=500, turn_seconds=10),
    "medium": DifficultyProfile("medium", "Medium", min_words=100, turn_seconds=8),
    "hard": DifficultyProfile("hard", "Hard", min_words=20, turn_seconds=6),
    "expert": DifficultyProfile("expert", "Expert", min_words=1, turn_seconds=5),
}


def get_difficulty(key: str, registry: Mapping[str, DifficultyProfile] | None = None) -> DifficultyProfile:
    """
    Look up a tier by key (case-insensitive).
    """
    reg = DIFFICULTIES if registry is None else registry
    try:
        return reg[key.strip().lower()]
    except KeyError as e:
        raise ValueError(f"Unknown difficulty: {key}. Available: {list(reg.keys())}") from e


def difficulty_keys(registry: Mapping[str, DifficultyProfile] | None = None) -> List[str]:
    reg = DIFFICULTIES if registry is None else registry
    return list(reg.keys())


def load_difficulties(path: Path | str) -> Dict[str, DifficultyProfile]:
    """
    Read a tier table from JSON. Missing "name" defaults to the capitalized key.

    Raises ValueError on a malformed table (non-object, missing fields, bad values).
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict) or not raw:
        raise ValueError(f"{path}: expected a non-empty JSON object of tiers")

    out: Dict[str, DifficultyProfile] = {}
    for key, spec in raw.items():
        k = str(key).strip().lower()
        try:
            out[k] = DifficultyProfile(
                key=k,
                name=str(spec.get("name", k.capitalize())),
                min_words=int(spec["min_words"]),
                turn_seconds=float(spec["turn_seconds"]),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"{path}: tier {key!r} needs min_words and turn_seconds") from e
    return out
