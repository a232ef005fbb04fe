"""
Download a newline-delimited English word list and write a normalized copy.

What it does:
- Downloads the raw list (default: dwyl/english-words words_alpha.txt).
- Trims, uppercases, drops entries shorter than 2 letters, de-duplicates.
- Writes one word per line, sorted, so the play/survey CLIs can run offline.

Usage:
    python -m script.fetch_wordlist --out data/words_alpha.txt
"""

import argparse
import sys
from pathlib import Path

from packages.lexicon import DEFAULT_WORDLIST_URL, IngestionFailure, fetch_lexicon


def main():
    ap = argparse.ArgumentParser(description="Download and normalize a word list")
    ap.add_argument("--url", default=DEFAULT_WORDLIST_URL)
    ap.add_argument("--out", default="data/words_alpha.txt")
    ap.add_argument("--timeout", type=float, default=30)
    args = ap.parse_args()

    try:
        words = fetch_lexicon(args.url, timeout=args.timeout)
    except IngestionFailure as e:
        print(f"Dictionary Error: {e}", file=sys.stderr)
        sys.exit(2)

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("\n".join(sorted(words)) + "\n", encoding="utf-8")
    print(f"Wrote {len(words)} words -> {out}")


if __name__ == "__main__":
    main()
