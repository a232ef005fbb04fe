"""
State -> view-model projection.

The engine never renders anything. Presentation layers (the terminal CLI,
or anything else) call `project(state)` after each stimulus and draw the
returned RoundView. `highlight` splits the text being typed around the
current fragment for a live preview.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from .rules import Phase, RoundState

# Display strings for the fragment slot
NO_FRAGMENT = "N/A"
GAME_OVER_TEXT = "BOOM!"

# Timer bar turns red at or below this fraction
URGENT_FRACTION = 0.25


@dataclass(frozen=True)
class RoundView:
    phase: Phase
    fragment: str
    time_fraction: float
    urgent: bool
    lives: int
    hearts: Tuple[bool, ...]
    used_letters: FrozenSet[str]
    tracked_letters: str
    words_played: int

    @property
    def can_submit(self) -> bool:
        return self.phase is Phase.IN_TURN


def project(state: RoundState) -> RoundView:
    if state.phase is Phase.GAME_OVER:
        fragment = GAME_OVER_TEXT
    elif state.phase is Phase.IDLE:
        fragment = ""
    elif state.challenge is None:
        fragment = NO_FRAGMENT
    else:
        fragment = state.challenge.fragment

    fraction = state.time_fraction if state.phase is Phase.IN_TURN else 0.0
    max_lives = state.config.max_lives
    return RoundView(
        phase=state.phase,
        fragment=fragment,
        time_fraction=fraction,
        urgent=state.phase is Phase.IN_TURN and fraction <= URGENT_FRACTION,
        lives=state.lives,
        hearts=tuple(i < state.lives for i in range(max_lives)),
        used_letters=frozenset(state.used_letters),
        tracked_letters=state.config.tracked_letters,
        words_played=state.words_played,
    )


def highlight(raw: str, fragment: str) -> Tuple[str, str, str]:
    """
    Split `raw` into (before, match, after) around the first case-insensitive
    occurrence of `fragment`. Original casing of `raw` is kept.

    highlight("scatter", "CAT") -> ("s", "cat", "ter")
    highlight("dog", "CAT")     -> ("dog", "", "")
    """
    if not raw or not fragment:
        return raw or "", "", ""
    at = raw.upper().find(fragment.upper())
    if at < 0:
        return raw, "", ""
    end = at + len(fragment)
    return raw[:at], raw[at:end], raw[end:]
