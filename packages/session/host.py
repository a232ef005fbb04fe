"""
Game host: the object a presentation layer talks to.

- Gates game start on the lexicon: LOADING -> READY, or LOADING -> UNAVAILABLE
  when ingestion fails (the host then holds no index and refuses to start).
- Owns one RoundState. Several hosts can share one FragmentIndex.
- Optionally drives a TurnTimer on an asyncio loop; every stimulus that may
  change the turn re-syncs the timer so stale ticks are cancelled.

Inputs:  start_game(key), submit_word(text), tick(dt)
Outputs: view() -> RoundView, plus availability / error / start_label
"""

from __future__ import annotations

import asyncio
import enum
import logging
import random
from typing import Callable, Iterable, Mapping

from packages.engine import (
    DifficultyProfile,
    FragmentIndex,
    IngestionFailure,
    LexiconUnavailable,
    RoundConfig,
    RoundState,
    RoundView,
    SubmitResult,
    build_fragment_index,
    get_difficulty,
    project,
)
from .timer import TICK_INTERVAL, TurnTimer

logger = logging.getLogger(__name__)


class Availability(enum.Enum):
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


# Start button labels, by availability
START_LABELS = {
    Availability.LOADING: "Loading...",
    Availability.READY: "Start Game",
    Availability.UNAVAILABLE: "Dictionary Error",
}


class GameHost:
    def __init__(
            self,
            *,
            config: RoundConfig | None = None,
            rng: random.Random | None = None,
            difficulties: Mapping[str, DifficultyProfile] | None = None,
    ):
        self.config = config or RoundConfig()
        self.rng = rng or random.Random()
        self.difficulties = difficulties

        self.availability = Availability.LOADING
        self.error: str | None = None
        self.index: FragmentIndex | None = None
        self.state: RoundState | None = None
        self.timer: TurnTimer | None = None

    # ---- lexicon gating ----

    @property
    def can_start(self) -> bool:
        return self.availability is Availability.READY

    @property
    def start_label(self) -> str:
        return START_LABELS[self.availability]

    def use_index(self, index: FragmentIndex) -> None:
        """Attach an already-built (possibly shared) index and become READY."""
        self.index = index
        self.state = RoundState(index, config=self.config, rng=self.rng)
        self.availability = Availability.READY
        self.error = None

    def load(self, lexicon: Iterable[str]) -> None:
        self.use_index(build_fragment_index(lexicon))

    def fail(self, error: Exception | str) -> None:
        self._cancel_timer()
        self.index = None
        self.state = None
        self.availability = Availability.UNAVAILABLE
        self.error = str(error)
        logger.error("Dictionary unavailable: %s", self.error)

    async def load_async(self, fetch: Callable[[], Iterable[str]]) -> Availability:
        """
        Run a blocking `fetch` (e.g. fetch_lexicon) and the index build in the
        default executor. IngestionFailure marks the host UNAVAILABLE; other
        exceptions propagate.
        """
        loop = asyncio.get_running_loop()
        self.availability = Availability.LOADING
        try:
            lexicon = await loop.run_in_executor(None, fetch)
        except IngestionFailure as e:
            self.fail(e)
            return self.availability
        index = await loop.run_in_executor(None, build_fragment_index, lexicon)
        self.use_index(index)
        return self.availability

    # ---- timer ----

    def attach_timer(
            self,
            loop: asyncio.AbstractEventLoop | None = None,
            *,
            interval: float = TICK_INTERVAL,
            on_tick: Callable[[RoundView], None] | None = None,
    ) -> TurnTimer:
        """Drive ticks from `loop` (default: the running loop)."""
        self._cancel_timer()
        self.timer = TurnTimer(self, loop=loop or asyncio.get_running_loop(),
                               interval=interval, on_tick=on_tick)
        self.timer.sync()
        return self.timer

    def _cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()

    def _sync_timer(self) -> None:
        if self.timer is not None:
            self.timer.sync()

    def close(self) -> None:
        self._cancel_timer()
        self.timer = None

    # ---- stimuli ----

    def _require_state(self) -> RoundState:
        if self.state is None:
            raise LexiconUnavailable(f"dictionary is not ready ({self.availability.value})")
        return self.state

    def start_game(self, difficulty_key: str) -> RoundView:
        state = self._require_state()
        profile = get_difficulty(difficulty_key, self.difficulties)
        state.start_game(profile)
        self._sync_timer()
        return project(state)

    def submit_word(self, text: str) -> SubmitResult:
        result = self._require_state().submit_word(text)
        if result.accepted:
            self._sync_timer()
        return result

    def tick(self, delta: float) -> bool:
        lost = self._require_state().tick(delta)
        if lost:
            self._sync_timer()
        return lost

    def view(self) -> RoundView | None:
        return project(self.state) if self.state is not None else None
