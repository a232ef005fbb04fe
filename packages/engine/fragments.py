"""
Inverted fragment index.

Given:
  - a lexicon (set of uppercase words, length >= 2)

Build:
  - a mapping FRAGMENT -> every word containing it, for all 2- and 3-letter
    windows of every word.

One entry is recorded per window POSITION, not per distinct value. A word
like "BANANA" therefore appears twice under "AN" and twice under "ANA". The
entry counts (duplicates included) are what the difficulty thresholds
compare against; the accepted-word set of a challenge is deduplicated later.

Example:
    CAT      -> CA, AT, CAT
    SCATTER  -> SC, CA, AT, TT, TE, ER, SCA, CAT, ATT, TTE, TER
    index["CAT"] == ("CAT", "SCATTER")

The index is built once per lexicon and is read-only afterwards, so any
number of selectors can read it concurrently without locking.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Tuple

logger = logging.getLogger(__name__)

# Window sizes used as challenge prompts.
FRAGMENT_LENGTHS: Tuple[int, ...] = (2, 3)


def fragments_of(word: str) -> Iterator[str]:
    """
    Yield every fragment window of `word`, 2-letter windows first.

    Repeated substrings are yielded once per offset.
    """
    n = len(word)
    for k in FRAGMENT_LENGTHS:
        for i in range(n - k + 1):
            yield word[i:i + k]


class FragmentIndex(Mapping[str, Tuple[str, ...]]):
    """Read-only mapping of fragment -> tuple of words (one entry per occurrence)."""

    __slots__ = ("_entries", "_word_count")

    def __init__(self, entries: Dict[str, Tuple[str, ...]], word_count: int = 0):
        self._entries = entries
        self._word_count = word_count

    def __getitem__(self, fragment: str) -> Tuple[str, ...]:
        return self._entries[fragment]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FragmentIndex(fragments={len(self._entries)}, words={self._word_count})"

    @property
    def word_count(self) -> int:
        """Number of lexicon words the index was built from."""
        return self._word_count

    def entry_count(self, fragment: str) -> int:
        """Number of index entries (duplicates included); 0 for unknown fragments."""
        return len(self._entries.get(fragment, ()))

    def words_for(self, fragment: str) -> FrozenSet[str]:
        """Deduplicated set of words containing `fragment`."""
        return frozenset(self._entries.get(fragment, ()))


def build_fragment_index(lexicon: Iterable[str]) -> FragmentIndex:
    """
    Build the fragment index for `lexicon`.

    Args:
      lexicon : iterable of normalized (uppercase) words

    Returns:
      FragmentIndex whose entry lists follow sorted word order, so two builds
      from the same lexicon are identical regardless of set iteration order.
    """
    buckets: Dict[str, List[str]] = defaultdict(list)
    words = sorted(set(lexicon))

    kept = 0
    for word in words:
        # Upstream filtering should already have removed these
        if len(word) < 2:
            continue
        kept += 1
        for frag in fragments_of(word):
            buckets[frag].append(word)

    entries = {frag: tuple(ws) for frag, ws in buckets.items()}
    logger.info("Indexed %d words into %d fragments", kept, len(entries))
    return FragmentIndex(entries, word_count=kept)
