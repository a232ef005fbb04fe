"""
Turn timer on an asyncio loop.

One pending `call_later` handle at a time. The handle is tagged with the
turn number it was armed for; when the turn changes (word accepted, life
lost, new game) or the game ends, `sync()` cancels it before arming a new
one. Ticks and word submissions both run as loop callbacks, so they never
mutate the round concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable

from packages.engine import Phase, RoundView, project

if TYPE_CHECKING:
    from .host import GameHost

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.1  # seconds


class TurnTimer:
    def __init__(
            self,
            host: "GameHost",
            *,
            loop: asyncio.AbstractEventLoop,
            interval: float = TICK_INTERVAL,
            on_tick: Callable[[RoundView], None] | None = None,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be > 0; got {interval}")
        self.host = host
        self.loop = loop
        self.interval = float(interval)
        self.on_tick = on_tick
        self._handle: asyncio.TimerHandle | None = None
        self._armed_turn: int | None = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    @property
    def armed_turn(self) -> int | None:
        return self._armed_turn if self._handle is not None else None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._armed_turn = None

    def sync(self) -> None:
        """Make the pending handle match the host's current turn (or cancel it)."""
        state = self.host.state
        if state is None or state.phase is not Phase.IN_TURN:
            self.cancel()
            return
        if self._handle is not None and self._armed_turn == state.turn:
            return

        self.cancel()
        self._armed_turn = state.turn
        self._handle = self.loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        armed_for = self._armed_turn
        self._handle = None
        state = self.host.state
        if state is None or state.phase is not Phase.IN_TURN or state.turn != armed_for:
            # Stale: the turn was replaced without a sync
            logger.debug("Dropping stale tick for turn %s", armed_for)
            self.sync()
            return

        self.host.tick(self.interval)
        if self.on_tick is not None:
            self.on_tick(project(self.host.state))
        self.sync()
