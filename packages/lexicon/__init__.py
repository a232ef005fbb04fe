from packages.engine.errors import IngestionFailure

from .io import DEFAULT_WORDLIST_URL, parse_lexicon, read_lexicon, fetch_lexicon
from .report import IngestReport, inspect_lexicon, pretty_summary

__all__ = [
    "IngestionFailure", "DEFAULT_WORDLIST_URL", "parse_lexicon", "read_lexicon", "fetch_lexicon",
    "IngestReport", "inspect_lexicon", "pretty_summary",
]
