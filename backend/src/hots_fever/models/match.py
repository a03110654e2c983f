"""Match history records."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MatchRecord:
    """One historical game played by a player on a hero."""

    win: bool
    game_date: datetime
