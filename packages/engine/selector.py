"""
Challenge selection.

Strategy (two phases, so tests can inject a seeded RNG):
  1) collect every fragment whose entry count meets the tier's threshold,
     in sorted order;
  2) pick one uniformly with `rng.randrange`.

Each eligible fragment is equally likely no matter how many words it has.
If nothing is eligible the selector returns None; the caller shows a
placeholder and keeps the turn running.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import FrozenSet, List

from .difficulty import DifficultyProfile
from .fragments import FragmentIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Challenge:
    fragment: str
    accepted_words: FrozenSet[str]
    entry_count: int

    def accepts(self, word: str) -> bool:
        return word in self.accepted_words


def eligible_fragments(index: FragmentIndex, min_words: int) -> List[str]:
    """Fragments whose entry list has at least `min_words` entries, sorted."""
    return sorted(frag for frag, words in index.items() if len(words) >= min_words)


def select_challenge(
        index: FragmentIndex,
        profile: DifficultyProfile,
        rng: random.Random | None = None,
) -> Challenge | None:
    """
    Pick the next challenge for `profile`, or None when no fragment qualifies.
    """
    rng = rng or random.Random()
    candidates = eligible_fragments(index, profile.min_words)
    if not candidates:
        logger.warning("No fragment has >= %d entries (difficulty %s)",
                       profile.min_words, profile.key)
        return None

    frag = candidates[rng.randrange(len(candidates))]
    return Challenge(
        fragment=frag,
        accepted_words=index.words_for(frag),
        entry_count=index.entry_count(frag),
    )
