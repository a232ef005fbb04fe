# apps/cli/play.py
"""
Terminal front end.

Loads the word list (file or URL) without blocking the event loop, then
plays one game per prompt: the turn timer ticks on the loop while the
player's input is read in a worker thread.
"""

from __future__ import annotations

import argparse
import asyncio
import functools
import logging
import random
import sys

from packages.engine import (
    Phase, RoundConfig, RoundView, Verdict, difficulty_keys, get_difficulty, load_difficulties,
)
from packages.engine.rules import TRACKED_LETTERS
from packages.lexicon import DEFAULT_WORDLIST_URL, fetch_lexicon, read_lexicon
from packages.session import Availability, GameHost

BAR_WIDTH = 20

VERDICT_TEXT = {
    Verdict.NOT_ACCEPTED: "nope",
    Verdict.ALREADY_USED: "already used",
    Verdict.EMPTY: "",
}


def render(view: RoundView) -> str:
    hearts = "".join("♥" if h else "·" for h in view.hearts)
    filled = int(round(view.time_fraction * BAR_WIDTH))
    bar = ("!" if view.urgent else "#") * filled + "-" * (BAR_WIDTH - filled)
    letters = "".join(c if c in view.used_letters else "_" for c in view.tracked_letters)
    return f"[{view.fragment:^5}] {hearts} |{bar}| {letters}"


async def play(host: GameHost, difficulty: str) -> int:
    loop = asyncio.get_running_loop()
    seen_turn = {"turn": 0}

    def on_tick(view: RoundView) -> None:
        # Only redraw when the timer itself moved the game on
        if host.state.turn != seen_turn["turn"] or view.phase is Phase.GAME_OVER:
            seen_turn["turn"] = host.state.turn
            print("\ntime's up!")
            print(render(view))
            if view.phase is Phase.GAME_OVER:
                print("press Enter")

    host.attach_timer(on_tick=on_tick)
    view = host.start_game(difficulty)
    seen_turn["turn"] = host.state.turn
    print(render(view))

    try:
        while host.state.phase is Phase.IN_TURN:
            raw = await loop.run_in_executor(None, input, "> ")
            if host.state.phase is not Phase.IN_TURN:
                break
            res = host.submit_word(raw)
            if res.accepted:
                if res.bonus:
                    print("alphabet bonus! +1 life")
                seen_turn["turn"] = host.state.turn
                print(render(host.view()))
            elif VERDICT_TEXT[res.verdict]:
                print(VERDICT_TEXT[res.verdict])
    finally:
        host.close()

    print(f"BOOM! words played: {host.state.words_played}")
    return 0


async def amain(args) -> int:
    difficulties = load_difficulties(args.difficulties) if args.difficulties else None
    host = GameHost(
        config=RoundConfig(tracked_letters=args.tracked),
        rng=random.Random(args.seed),
        difficulties=difficulties,
    )
    try:
        get_difficulty(args.difficulty, difficulties)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    if args.wordlist:
        fetch = functools.partial(read_lexicon, args.wordlist)
    else:
        fetch = functools.partial(fetch_lexicon, args.url)

    print(host.start_label)
    if await host.load_async(fetch) is not Availability.READY:
        print(f"{host.start_label}: {host.error}", file=sys.stderr)
        return 2

    return await play(host, args.difficulty)


def main():
    ap = argparse.ArgumentParser(description="wordfuse: type a word containing the fragment before time runs out")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--wordlist", help="path to a newline-delimited word list")
    src.add_argument("--url", default=DEFAULT_WORDLIST_URL, help="word list URL (used when --wordlist is absent)")
    ap.add_argument("--difficulty", default="easy", help=f"one of: {', '.join(difficulty_keys())}")
    ap.add_argument("--difficulties", help="JSON file overriding the built-in tiers")
    ap.add_argument("--tracked", default=TRACKED_LETTERS, help="letters counted for the alphabet bonus")
    ap.add_argument("--seed", type=int, help="RNG seed for fragment selection")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(amain(args)))


if __name__ == "__main__":
    main()
