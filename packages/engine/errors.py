"""
Exception types shared by the engine, the lexicon loaders and the session host.

Rejected words are NOT errors: they come back as a `Verdict` on the
`SubmitResult`. Exceptions are reserved for conditions the caller has to
handle (no dictionary) or bugs in the caller (driving a finished game).
"""


class WordfuseError(Exception):
    """Base class for every error raised by this project."""


class IngestionFailure(WordfuseError):
    """The word list could not be fetched, read or parsed into a usable lexicon."""


class StateViolation(WordfuseError):
    """An operation was called in a phase that does not allow it."""


class LexiconUnavailable(StateViolation):
    """A game was started before the lexicon finished loading (or after it failed)."""
