from .errors import WordfuseError, IngestionFailure, StateViolation, LexiconUnavailable
from .fragments import FragmentIndex, build_fragment_index, fragments_of
from .difficulty import DifficultyProfile, DIFFICULTIES, get_difficulty, difficulty_keys, load_difficulties
from .selector import Challenge, eligible_fragments, select_challenge
from .rules import Phase, Verdict, RoundConfig, RoundState, SubmitResult
from .view import RoundView, project, highlight

__all__ = [
    "WordfuseError", "IngestionFailure", "StateViolation", "LexiconUnavailable",
    "FragmentIndex", "build_fragment_index", "fragments_of",
    "DifficultyProfile", "DIFFICULTIES", "get_difficulty", "difficulty_keys", "load_difficulties",
    "Challenge", "eligible_fragments", "select_challenge",
    "Phase", "Verdict", "RoundConfig", "RoundState", "SubmitResult",
    "RoundView", "project", "highlight",
]
