from .host import Availability, GameHost
from .timer import TICK_INTERVAL, TurnTimer

__all__ = ["Availability", "GameHost", "TICK_INTERVAL", "TurnTimer"]
