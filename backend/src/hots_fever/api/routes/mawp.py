"""MAWP calculator endpoint."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from hots_fever.config import settings
from hots_fever.models.match import MatchRecord
from hots_fever.services.mawp import confidence_adjusted_mawp, confidence_label, summarize_hero_matches

router = APIRouter(prefix="/api", tags=["mawp"])


class MatchIn(BaseModel):
    win: bool
    game_date: datetime


class MawpRequest(BaseModel):
    matches: list[MatchIn] = Field(default_factory=list)
    now: Optional[datetime] = None
    hero: str = ""


@router.post("/mawp")
async def calculate_mawp(body: MawpRequest):
    """Compute MAWP and related stats for posted match outcomes."""
    records = [MatchRecord(win=m.win, game_date=m.game_date) for m in body.matches]
    summary = summarize_hero_matches(body.hero, records, body.now)
    threshold = settings.confidence_threshold
    raw = summary.win_rate if summary.games else summary.mawp
    adjusted = confidence_adjusted_mawp(summary.mawp, raw, summary.games, threshold)
    return {
        "hero": summary.hero,
        "games": summary.games,
        "wins": summary.wins,
        "win_rate": summary.win_rate,
        "mawp": summary.mawp,
        "mawp_percent": round(summary.mawp * 100, 1),
        "confidence_adjusted_mawp": adjusted,
        "confidence": confidence_label(summary.games, threshold),
        "recent_win_rate": summary.recent_win_rate,
        "trend": summary.trend,
    }
