import asyncio
import random

import pytest
from packages.engine import (
    DifficultyProfile,
    IngestionFailure,
    LexiconUnavailable,
    Phase,
    build_fragment_index,
)
from packages.session import Availability, GameHost

CAT_WORDS = {"CAT", "CATALOG", "SCATTER"}
TIERS = {
    "trio": DifficultyProfile("trio", "Trio", min_words=3, turn_seconds=5),
    "quick": DifficultyProfile("quick", "Quick", min_words=1, turn_seconds=0.05),
}


class _Handle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fired = True
        self.callback()


class _ManualLoop:
    """Records call_later handles; tests fire them by hand."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        h = _Handle(delay, callback)
        self.handles.append(h)
        return h

    @property
    def pending(self):
        return [h for h in self.handles if not (h.cancelled or h.fired)]


def _ready_host(**kwargs):
    host = GameHost(rng=random.Random(5), difficulties=TIERS, **kwargs)
    host.load(CAT_WORDS)
    return host


def test_start_is_gated_until_loaded():
    host = GameHost(difficulties=TIERS)
    assert host.availability is Availability.LOADING
    assert host.start_label == "Loading..."
    assert not host.can_start
    with pytest.raises(LexiconUnavailable):
        host.start_game("trio")


def test_failed_ingestion_is_unavailable():
    host = GameHost(difficulties=TIERS)
    host.fail(IngestionFailure("offline"))
    assert host.availability is Availability.UNAVAILABLE
    assert host.start_label == "Dictionary Error"
    assert host.error == "offline"
    assert host.index is None and host.view() is None
    with pytest.raises(LexiconUnavailable):
        host.start_game("trio")


def test_load_async_success_and_failure():
    def bad_fetch():
        raise IngestionFailure("404")

    ok = GameHost(difficulties=TIERS)
    assert asyncio.run(ok.load_async(lambda: CAT_WORDS)) is Availability.READY
    assert ok.start_label == "Start Game"
    assert ok.start_game("trio").phase is Phase.IN_TURN

    bad = GameHost(difficulties=TIERS)
    assert asyncio.run(bad.load_async(bad_fetch)) is Availability.UNAVAILABLE
    assert bad.error == "404"


def test_host_stimuli():
    host = _ready_host()
    view = host.start_game("TRIO")
    assert view.fragment in {"AT", "CA", "CAT"}
    assert host.submit_word("dog").verdict.name == "NOT_ACCEPTED"
    assert host.submit_word("cat").accepted
    assert host.tick(5) is True
    assert host.view().lives == 2


def test_unknown_difficulty():
    with pytest.raises(ValueError):
        _ready_host().start_game("easy")


def test_hosts_share_index_but_not_state():
    index = build_fragment_index(CAT_WORDS)
    a = GameHost(rng=random.Random(1), difficulties=TIERS)
    b = GameHost(rng=random.Random(2), difficulties=TIERS)
    a.use_index(index)
    b.use_index(index)
    a.start_game("trio")
    b.start_game("trio")

    assert a.submit_word("CAT").accepted
    assert b.submit_word("CAT").accepted
    a.tick(5)
    assert (a.view().lives, b.view().lives) == (2, 3)
    assert a.index is b.index


def test_timer_arms_per_turn_and_cancels_stale_handles():
    loop = _ManualLoop()
    host = _ready_host()
    timer = host.attach_timer(loop, interval=0.1)
    assert loop.pending == []  # idle: nothing to time

    host.start_game("trio")
    assert len(loop.pending) == 1
    first = loop.pending[0]
    assert timer.armed_turn == 1

    host.submit_word("CAT")
    assert first.cancelled
    assert len(loop.pending) == 1
    assert timer.armed_turn == 2

    # Firing the live handle ticks the round and re-arms for the same turn
    loop.pending[0].fire()
    assert host.state.remaining == pytest.approx(4.9)
    assert len(loop.pending) == 1
    assert timer.armed_turn == 2


def test_timer_rejected_word_keeps_handle():
    loop = _ManualLoop()
    host = _ready_host()
    host.attach_timer(loop)
    host.start_game("trio")
    h = loop.pending[0]
    host.submit_word("nope")
    assert loop.pending == [h]


def test_stale_handle_does_not_tick_new_turn():
    loop = _ManualLoop()
    host = _ready_host()
    host.attach_timer(loop)
    host.start_game("trio")
    stale = loop.pending[0]

    # Replace the turn behind the timer's back, then fire the old callback
    host.state.submit_word("CAT")
    stale.fire()
    assert host.state.remaining == 5
    assert host.timer.armed_turn == host.state.turn


def test_timer_cancelled_on_game_over_and_restart():
    loop = _ManualLoop()
    host = _ready_host()
    host.attach_timer(loop)
    host.start_game("trio")
    for _ in range(3):
        host.tick(5)
    assert host.state.phase is Phase.GAME_OVER
    assert loop.pending == []

    host.start_game("trio")
    assert len(loop.pending) == 1


def test_timer_runs_game_to_completion_on_real_loop():
    seen = []

    async def scenario():
        host = _ready_host()
        host.attach_timer(interval=0.01, on_tick=seen.append)
        host.start_game("quick")
        deadline = asyncio.get_running_loop().time() + 5.0
        while host.state.phase is Phase.IN_TURN and asyncio.get_running_loop().time() < deadline:
            await asyncio.sleep(0.01)
        armed = host.timer.armed
        host.close()
        return host.state.phase, armed

    phase, armed = asyncio.run(scenario())
    assert phase is Phase.GAME_OVER
    assert not armed
    assert seen and seen[-1].fragment == "BOOM!"
