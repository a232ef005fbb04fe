from .core import BotPlayer, survey_difficulties, run_playout, run_batch
from .io import write_csv, write_manifest

__all__ = ["BotPlayer", "survey_difficulties", "run_playout", "run_batch", "write_csv", "write_manifest"]
