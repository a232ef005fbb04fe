"""
Round / lives state machine.

Phases:
    IDLE --start_game--> IN_TURN --(lives hit 0)--> GAME_OVER --start_game--> IN_TURN

Inside IN_TURN two stimuli drive the state, and the caller must serialize them:
  - tick(dt)          : timer; at 0 seconds a life is lost and a new turn starts
  - submit_word(raw)  : player input; an accepted word starts a new turn

Rules:
  - A word is accepted iff it is in the current challenge's accepted set and
    has not been used earlier in this game.
  - Accepted words mark their distinct letters as used. Once every tracked
    letter is used the player regains one life (capped at max_lives) and the
    letter set is cleared, so the bonus can be earned again.
  - Wrong or repeated words cost nothing; only timeouts cost lives.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import FrozenSet, Set

from .difficulty import DifficultyProfile
from .errors import StateViolation
from .fragments import FragmentIndex
from .selector import Challenge, select_challenge

logger = logging.getLogger(__name__)

STARTING_LIVES = 3
MAX_LIVES = 5
# Z is not tracked, same as the original game board.
TRACKED_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXY"


class Phase(enum.Enum):
    IDLE = "idle"
    IN_TURN = "in_turn"
    GAME_OVER = "game_over"


class Verdict(enum.Enum):
    ACCEPTED = "accepted"
    EMPTY = "empty"
    NOT_ACCEPTED = "not_accepted"
    ALREADY_USED = "already_used"


@dataclass(frozen=True)
class RoundConfig:
    starting_lives: int = STARTING_LIVES
    max_lives: int = MAX_LIVES
    tracked_letters: str = TRACKED_LETTERS

    def __post_init__(self):
        if self.max_lives < 1:
            raise ValueError(f"max_lives must be >= 1; got {self.max_lives}")
        if not 1 <= self.starting_lives <= self.max_lives:
            raise ValueError(
                f"starting_lives must be in [1, {self.max_lives}]; got {self.starting_lives}")
        if not self.tracked_letters:
            raise ValueError("tracked_letters must not be empty")
        # Normalize so "abc" and "CBA" configure the same set
        object.__setattr__(self, "tracked_letters", "".join(sorted(set(self.tracked_letters.upper()))))

    @property
    def tracked_set(self) -> FrozenSet[str]:
        return frozenset(self.tracked_letters)


@dataclass(frozen=True)
class SubmitResult:
    word: str
    verdict: Verdict
    bonus: bool = False

    @property
    def accepted(self) -> bool:
        return self.verdict is Verdict.ACCEPTED


class RoundState:
    """
    State of one game session. Not shared: each session owns its own instance,
    while the FragmentIndex it reads from may be shared by many.
    """

    def __init__(
            self,
            index: FragmentIndex,
            *,
            config: RoundConfig | None = None,
            rng: random.Random | None = None,
    ):
        self.index = index
        self.config = config or RoundConfig()
        self.rng = rng or random.Random()

        self.phase = Phase.IDLE
        self.profile: DifficultyProfile | None = None
        self.lives = self.config.starting_lives
        self.used_words: Set[str] = set()
        self.used_letters: Set[str] = set()
        self.challenge: Challenge | None = None
        self.remaining = 0.0
        # Incremented on every new turn; timers use it to detect stale callbacks.
        self.turn = 0

    # ---- queries ----

    @property
    def turn_seconds(self) -> float:
        return float(self.profile.turn_seconds) if self.profile else 0.0

    @property
    def time_fraction(self) -> float:
        """Remaining time as a fraction of the turn duration, clamped to [0, 1]."""
        total = self.turn_seconds
        if total <= 0:
            return 0.0
        return max(0.0, min(1.0, self.remaining / total))

    @property
    def words_played(self) -> int:
        return len(self.used_words)

    def _require_turn(self, op: str) -> None:
        if self.phase is not Phase.IN_TURN:
            raise StateViolation(f"{op}() is only valid in {Phase.IN_TURN.name}; phase is {self.phase.name}")

    # ---- transitions ----

    def start_game(self, profile: DifficultyProfile) -> None:
        """Reset lives and per-game history, then open the first turn."""
        self.profile = profile
        self.lives = self.config.starting_lives
        self.used_words.clear()
        self.used_letters.clear()
        self.turn = 0
        self.phase = Phase.IN_TURN
        logger.debug("Game started: difficulty=%s lives=%d", profile.key, self.lives)
        self._new_turn()

    def _new_turn(self) -> None:
        self.challenge = select_challenge(self.index, self.profile, self.rng)
        self.remaining = self.turn_seconds
        self.turn += 1

    def tick(self, delta: float) -> bool:
        """
        Advance the turn timer by `delta` seconds.

        Returns True if the timer ran out and a life was lost.
        """
        self._require_turn("tick")
        if delta < 0:
            raise ValueError(f"tick delta must be >= 0; got {delta}")

        self.remaining = max(0.0, self.remaining - delta)
        if self.remaining <= 0:
            self.lose_life()
            return True
        return False

    def submit_word(self, raw: str) -> SubmitResult:
        self._require_turn("submit_word")
        word = (raw or "").strip().upper()

        if not word:
            return SubmitResult(word, Verdict.EMPTY)
        if self.challenge is None or not self.challenge.accepts(word):
            return SubmitResult(word, Verdict.NOT_ACCEPTED)
        if word in self.used_words:
            return SubmitResult(word, Verdict.ALREADY_USED)

        self.used_words.add(word)
        self.used_letters.update(word)
        bonus = self._apply_alphabet_bonus()
        self._new_turn()
        return SubmitResult(word, Verdict.ACCEPTED, bonus=bonus)

    def _apply_alphabet_bonus(self) -> bool:
        if not self.config.tracked_set <= self.used_letters:
            return False
        self.lives = min(self.lives + 1, self.config.max_lives)
        self.used_letters.clear()
        logger.info("Alphabet bonus: lives=%d", self.lives)
        return True

    def lose_life(self) -> None:
        self._require_turn("lose_life")
        self.lives -= 1
        if self.lives <= 0:
            self.lives = 0
            self.phase = Phase.GAME_OVER
            self.challenge = None
            self.remaining = 0.0
            logger.debug("Game over after %d words", self.words_played)
            return
        self._new_turn()
