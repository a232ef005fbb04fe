# apps/cli/survey.py
"""
CLI entry point for calibrating difficulty tiers against a word list.

This script:
  1) Reads the word list and prints an ingest summary (counts + SHA).
  2) Builds the fragment index and prints eligible-fragment stats per tier.
  3) Runs simulated bot games per tier with a progress bar and writes:
       - CSV:  one row per playout
       - JSON: manifest with config, lexicon report, tier stats, git commit
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from packages.engine import DIFFICULTIES, RoundConfig, build_fragment_index, load_difficulties
from packages.engine.rules import TRACKED_LETTERS
from packages.lexicon import IngestionFailure, inspect_lexicon, parse_lexicon, pretty_summary
from packages.lexicon.report import as_dict
from packages.survey import BotPlayer, run_playout, survey_difficulties
from packages.survey.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown


def main():
    ap = argparse.ArgumentParser(description="wordfuse: survey difficulty tiers on a word list")
    ap.add_argument("--wordlist", required=True, help="path to a newline-delimited word list")
    ap.add_argument("--difficulties", help="JSON file overriding the built-in tiers")
    ap.add_argument("--playouts", type=int, default=50, help="simulated games per tier (0 = stats only)")
    ap.add_argument("--recall", type=float, default=0.8,
                    help="probability the bot knows a valid word on a given turn")
    ap.add_argument("--tracked", default=TRACKED_LETTERS, help="letters counted for the alphabet bonus")
    ap.add_argument("--seed", type=int, default=123, help="base RNG seed (for reproducibility)")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--progress", choices=["bar", "off"], default="bar")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    # 1) Ingest
    try:
        text = Path(args.wordlist).read_text(encoding="utf-8")
        lexicon = parse_lexicon(text)
    except (OSError, UnicodeDecodeError, IngestionFailure) as e:
        print(f"Dictionary Error: {e}", file=sys.stderr)
        sys.exit(2)
    rep = inspect_lexicon(text)
    print(pretty_summary(rep))

    # 2) Index + tier stats
    index = build_fragment_index(lexicon)
    profiles = load_difficulties(args.difficulties) if args.difficulties else DIFFICULTIES
    tiers = survey_difficulties(index, profiles.values())
    print(f"fragments={len(index)}")
    for row in tiers:
        print(
            f"  {row['difficulty']:<8} min_words={row['min_words']:<5} eligible={row['eligible']:<6} "
            f"share={row['share']:.3f} p50={row['size_p50']:.0f} p90={row['size_p90']:.0f}"
        )

    # 3) Playouts
    config = RoundConfig(tracked_letters=args.tracked)
    cases = [(p, i) for p in profiles.values() for i in range(1, args.playouts + 1)]
    iterator = tqdm(cases, ncols=80, desc="Playing", unit="game", file=sys.stderr) \
        if args.progress == "bar" else cases

    results = []
    for profile, idx in iterator:
        case_seed = args.seed + idx
        bot = BotPlayer(args.recall, seed=case_seed)
        results.append(run_playout(index, profile, bot=bot, config=config, seed=case_seed))

    for profile in profiles.values():
        games = [r for r in results if r["difficulty"] == profile.key]
        if games:
            avg = sum(r["words"] for r in games) / len(games)
            print(f"  {profile.key:<8} avg_words={avg:.1f} games={len(games)}")

    # 4) Outputs
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    csv_path = outdir / f"survey_{run_id}.csv"
    manifest_path = outdir / f"survey_{run_id}_manifest.json"

    if results:
        write_csv(results, str(csv_path))
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "lexicon": as_dict(rep),
        "fragments": len(index),
        "tiers": tiers,
        "num_playouts": len(results),
    }
    write_manifest(manifest, str(manifest_path))

    if results:
        print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
