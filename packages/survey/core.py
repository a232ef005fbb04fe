"""
Difficulty calibration harness.

- survey_difficulties: how many fragments each tier makes eligible, and how
  large their accepted-word sets are (numpy percentiles).
- BotPlayer:           a simulated player that "knows" a word with
                       probability `recall` and otherwise lets the turn time out.
- run_playout:         one simulated game driven through RoundState with
                       the same tick/submit stimuli a real UI would send.
- run_batch:           many playouts with derived seeds (seed + idx).

These functions are UI-agnostic so the CLI, a notebook, or tests can reuse them.
"""

from __future__ import annotations

import random
from typing import Dict, Iterable, List

import numpy as np

from packages.engine import (
    DifficultyProfile,
    FragmentIndex,
    Phase,
    RoundConfig,
    RoundState,
    eligible_fragments,
)

# Safety cap so a bot with recall=1.0 on a huge lexicon still terminates.
DEFAULT_MAX_TURNS = 500


def survey_difficulties(index: FragmentIndex, profiles: Iterable[DifficultyProfile]) -> List[Dict]:
    """
    One row per tier:
      difficulty, min_words, turn_seconds, eligible, share,
      size_min, size_p50, size_p90, size_max   (accepted-set sizes; 0 when none)
    """
    rows: List[Dict] = []
    total = len(index)
    for p in profiles:
        frags = eligible_fragments(index, p.min_words)
        sizes = np.array([len(index.words_for(f)) for f in frags], dtype=float)
        if sizes.size:
            smin, p50, p90, smax = (float(sizes.min()), float(np.percentile(sizes, 50)),
                                    float(np.percentile(sizes, 90)), float(sizes.max()))
        else:
            smin = p50 = p90 = smax = 0.0
        rows.append({
            "difficulty": p.key,
            "min_words": p.min_words,
            "turn_seconds": p.turn_seconds,
            "eligible": len(frags),
            "share": round(len(frags) / total, 4) if total else 0.0,
            "size_min": smin,
            "size_p50": p50,
            "size_p90": p90,
            "size_max": smax,
        })
    return rows


class BotPlayer:
    """
    Answers with a random unused accepted word with probability `recall`,
    otherwise returns None (no answer this turn).
    """

    def __init__(self, recall: float = 0.8, seed: int | None = None):
        if not 0.0 <= recall <= 1.0:
            raise ValueError(f"recall must be in [0, 1]; got {recall}")
        self.recall = float(recall)
        self.rng = random.Random(seed)

    def answer(self, state: RoundState) -> str | None:
        ch = state.challenge
        if ch is None or self.rng.random() >= self.recall:
            return None
        # sorted() keeps picks reproducible under a fixed seed
        pool = sorted(ch.accepted_words - state.used_words)
        if not pool:
            return None
        return pool[self.rng.randrange(len(pool))]


def run_playout(
        index: FragmentIndex,
        profile: DifficultyProfile,
        *,
        bot: BotPlayer,
        config: RoundConfig | None = None,
        seed: int | None = None,
        max_turns: int = DEFAULT_MAX_TURNS,
) -> Dict:
    """
    Play one game to GAME_OVER (or `max_turns`).

    Returns dict with keys:
        difficulty, seed, turns, words, bonuses, lives_lost, empty_turns, finished
    """
    state = RoundState(index, config=config, rng=random.Random(seed))
    state.start_game(profile)

    bonuses = lives_lost = empty_turns = 0
    while state.phase is Phase.IN_TURN and state.turn <= max_turns:
        if state.challenge is None:
            empty_turns += 1

        word = bot.answer(state)
        if word is not None:
            res = state.submit_word(word)
            if res.accepted:
                bonuses += int(res.bonus)
                continue

        # No answer: let the full turn elapse
        state.tick(state.remaining)
        lives_lost += 1

    return {
        "difficulty": profile.key,
        "seed": seed,
        "turns": state.turn,
        "words": state.words_played,
        "bonuses": bonuses,
        "lives_lost": lives_lost,
        "empty_turns": empty_turns,
        "finished": state.phase is Phase.GAME_OVER,
    }


def run_batch(
        index: FragmentIndex,
        profile: DifficultyProfile,
        n: int,
        *,
        recall: float = 0.8,
        config: RoundConfig | None = None,
        seed: int | None = None,
        max_turns: int = DEFAULT_MAX_TURNS,
) -> List[Dict]:
    """
    Run `n` playouts. Each case's seed is derived from the base seed (seed + idx)
    so batches are reproducible but cases differ.
    """
    out: List[Dict] = []
    for idx in range(1, n + 1):
        case_seed = None if seed is None else seed + idx
        bot = BotPlayer(recall, seed=case_seed)
        out.append(run_playout(index, profile, bot=bot, config=config,
                               seed=case_seed, max_turns=max_turns))
    return out
