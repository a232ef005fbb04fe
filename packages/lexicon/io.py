"""
Lexicon ingestion.

Responsibilities:
- parse_lexicon: raw newline-delimited text -> frozenset of uppercase words.
- read_lexicon:  same, from a UTF-8 file on disk.
- fetch_lexicon: same, downloaded over HTTP with `requests`.

Rules (applied to every line):
  - trim surrounding whitespace (handles CRLF files too)
  - uppercase
  - drop entries shorter than MIN_WORD_LENGTH
  - deduplicate

Every failure (missing file, HTTP error, undecodable bytes, nothing usable
left after filtering) is raised as IngestionFailure so callers can tell
"no dictionary" apart from bugs. There is no retry here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet

import requests

from packages.engine.errors import IngestionFailure

logger = logging.getLogger(__name__)

DEFAULT_WORDLIST_URL = "https://raw.githubusercontent.com/dwyl/english-words/master/words_alpha.txt"
# Two-letter words count: "IT" is a valid answer for the fragment "IT".
MIN_WORD_LENGTH = 2


def normalize_word(raw: str) -> str:
    return raw.strip().upper()


def parse_lexicon(text: str) -> FrozenSet[str]:
    """
    Turn raw word-list text into a lexicon.

    Raises IngestionFailure if no line survives filtering.
    """
    words = {normalize_word(ln) for ln in text.split("\n")}
    lexicon = frozenset(w for w in words if len(w) >= MIN_WORD_LENGTH)
    if not lexicon:
        raise IngestionFailure(f"word list contains no words of length >= {MIN_WORD_LENGTH}")
    return lexicon


def read_lexicon(p: Path | str) -> FrozenSet[str]:
    """
    Read a UTF-8 word list from disk.
    """
    p = Path(p)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionFailure(f"cannot read word list {p}: {e}") from e

    lexicon = parse_lexicon(text)
    logger.info("Loaded %d words from %s", len(lexicon), p)
    return lexicon


def fetch_lexicon(
        url: str = DEFAULT_WORDLIST_URL,
        *,
        timeout: float = 30,
        session: requests.Session | None = None,
) -> FrozenSet[str]:
    """
    Download a word list and parse it.

    Args:
      url     : raw text URL, one word per line
      timeout : seconds for the HTTP request
      session : optional requests.Session (reuse connections, or stub in tests)
    """
    http = session or requests
    try:
        r = http.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise IngestionFailure(f"failed to fetch word list from {url}: {e}") from e

    lexicon = parse_lexicon(r.text)
    logger.info("Fetched %d words from %s", len(lexicon), url)
    return lexicon
