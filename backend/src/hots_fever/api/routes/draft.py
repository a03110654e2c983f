"""REST endpoints for live draft sessions."""

import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from hots_fever.config import settings
from hots_fever.models.draft import (
    DraftAction,
    DraftActionType,
    DraftPhase,
    DraftState,
    SkillTier,
    Team,
)
from hots_fever.models.draft_data import DraftData
from hots_fever.services.draft_recommendation_engine import DraftPolicy, DraftRecommendationEngine
from hots_fever.services.draft_sequence import (
    DRAFT_SEQUENCE,
    describe_turn,
    get_step,
    get_team_bans,
    get_team_picks,
)
from hots_fever.services.draft_state_machine import create_initial_state, draft_reducer
from hots_fever.utils.hero_names import is_known_hero, normalize_hero_name

logger = logging.getLogger(__name__)

SESSION_TTL_SECONDS = 60 * 60
SESSION_CLEANUP_INTERVAL_SECONDS = 60
MAX_CACHED_DRAFT_DATA = 16

router = APIRouter(prefix="/api/draft", tags=["draft"])

# In-memory session storage with thread-safe access
_sessions: dict[str, DraftState] = {}
_session_access: dict[str, float] = {}
_sessions_lock = threading.Lock()
_cleanup_lock = threading.Lock()
_last_cleanup = 0.0

# DraftData bundles keyed by (tier, map, battletags), least recently used first
_data_cache: OrderedDict[tuple, DraftData] = OrderedDict()
_data_cache_lock = threading.Lock()

# Payload fields each action needs before it reaches the reducer
_REQUIRED_FIELDS: dict[DraftActionType, tuple[str, ...]] = {
    DraftActionType.SET_MAP: ("map",),
    DraftActionType.SET_TIER: ("tier",),
    DraftActionType.SET_TEAM: ("team",),
    DraftActionType.SET_PLAYER: ("slot_index",),
    DraftActionType.SELECT_HERO: ("hero",),
    DraftActionType.ASSIGN_PLAYER: ("step_index", "battletag"),
}


class CreateSessionRequest(BaseModel):
    map: Optional[str] = None
    tier: Optional[SkillTier] = None
    our_team: Team = Team.A
    battletags: list[str] = Field(default_factory=list)


class ActionRequest(BaseModel):
    type: DraftActionType
    map: Optional[str] = None
    tier: Optional[SkillTier] = None
    team: Optional[Team] = None
    slot_index: Optional[int] = None
    battletag: Optional[str] = None
    hero: Optional[str] = None
    step_index: Optional[int] = None


def clear_draft_data_cache() -> None:
    """Drop cached DraftData bundles so the next request reloads them."""
    with _data_cache_lock:
        _data_cache.clear()


def _prune_expired_sessions(now: Optional[float] = None) -> None:
    """Remove sessions idle longer than the TTL, at most once per interval."""
    global _last_cleanup
    now = now if now is not None else time.time()
    if now - _last_cleanup < SESSION_CLEANUP_INTERVAL_SECONDS:
        return

    with _cleanup_lock:
        if now - _last_cleanup < SESSION_CLEANUP_INTERVAL_SECONDS:
            return

        with _sessions_lock:
            expired = [
                session_id
                for session_id, last_access in _session_access.items()
                if now - last_access >= SESSION_TTL_SECONDS
            ]
            for session_id in expired:
                _sessions.pop(session_id, None)
                _session_access.pop(session_id, None)

        if expired:
            logger.info(f"Pruned {len(expired)} expired draft sessions")
        _last_cleanup = now


def _get_session(session_id: str) -> DraftState:
    _prune_expired_sessions()
    with _sessions_lock:
        state = _sessions.get(session_id)
        if state is not None:
            _session_access[session_id] = time.time()
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def _get_engine(request: Request) -> DraftRecommendationEngine:
    """Get or lazily create the recommendation engine on app state."""
    if not hasattr(request.app.state, "engine"):
        request.app.state.engine = DraftRecommendationEngine(DraftPolicy.from_settings(settings))
    return request.app.state.engine


def _get_draft_data(request: Request, state: DraftState) -> DraftData:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="No stats database configured")

    key = (state.tier.value, state.map, tuple(state.battletags))
    with _data_cache_lock:
        cached = _data_cache.get(key)
        if cached is not None:
            _data_cache.move_to_end(key)
    if cached is not None:
        return cached

    data = repository.get_draft_data(state.tier, state.map, state.battletags)
    with _data_cache_lock:
        _data_cache[key] = data
        while len(_data_cache) > MAX_CACHED_DRAFT_DATA:
            _data_cache.popitem(last=False)
    logger.info(f"Loaded draft data for tier={key[0]} map={key[1]} players={len(key[2])}")
    return data


def _to_action(body: ActionRequest) -> DraftAction:
    """Validate action payload and convert to a reducer action."""
    missing = [name for name in _REQUIRED_FIELDS.get(body.type, ()) if getattr(body, name) is None]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"{body.type.value} requires: {', '.join(missing)}",
        )

    hero = body.hero
    if hero is not None:
        hero = normalize_hero_name(hero)
        if not is_known_hero(hero):
            raise HTTPException(status_code=400, detail=f"Unknown hero: {body.hero}")

    return DraftAction(
        type=body.type,
        map=body.map,
        tier=body.tier,
        team=body.team,
        slot_index=body.slot_index,
        battletag=body.battletag,
        hero=hero,
        step_index=body.step_index,
    )


def _serialize_state(state: DraftState) -> dict:
    step = get_step(state.current_step)
    return {
        "phase": state.phase.value,
        "map": state.map,
        "tier": state.tier.value,
        "our_team": state.our_team.value,
        "current_step": state.current_step,
        "current_turn": describe_turn(state.current_step, state.our_team),
        "step": (
            {"team": step.team.value, "type": step.type.value, "label": step.label}
            if step and state.phase == DraftPhase.DRAFTING
            else None
        ),
        "selections": {str(index): hero for index, hero in sorted(state.selections.items())},
        "player_slots": [slot.battletag for slot in state.player_slots],
        "player_assignments": {
            str(index): battletag for index, battletag in sorted(state.player_assignments.items())
        },
        "our_picks": get_team_picks(state, state.our_team),
        "enemy_picks": get_team_picks(state, state.enemy_team),
        "our_bans": get_team_bans(state, state.our_team),
        "enemy_bans": get_team_bans(state, state.enemy_team),
    }


def _recommendations(request: Request, state: DraftState) -> list[dict]:
    data = _get_draft_data(request, state)
    recommendations = _get_engine(request).get_recommendations(state, data)
    return [rec.to_dict() for rec in recommendations]


@router.get("/sequence")
async def get_sequence():
    """The 16-step Storm League draft order."""
    return {
        "steps": [
            {"index": index, "team": step.team.value, "type": step.type.value, "label": step.label}
            for index, step in enumerate(DRAFT_SEQUENCE)
        ]
    }


@router.post("/sessions", status_code=201)
async def create_session(body: Optional[CreateSessionRequest] = None):
    """Create a draft session in the setup phase."""
    body = body or CreateSessionRequest()
    if len(body.battletags) > 5:
        raise HTTPException(status_code=400, detail="At most 5 battletags")

    state = create_initial_state()
    tier = body.tier or SkillTier(settings.default_tier)
    state = draft_reducer(state, DraftAction(type=DraftActionType.SET_TIER, tier=tier))
    state = draft_reducer(state, DraftAction(type=DraftActionType.SET_TEAM, team=body.our_team))
    if body.map:
        state = draft_reducer(state, DraftAction(type=DraftActionType.SET_MAP, map=body.map))
    for slot_index, battletag in enumerate(body.battletags):
        state = draft_reducer(
            state,
            DraftAction(type=DraftActionType.SET_PLAYER, slot_index=slot_index, battletag=battletag),
        )

    _prune_expired_sessions()
    session_id = f"draft_{uuid.uuid4().hex[:12]}"
    with _sessions_lock:
        _sessions[session_id] = state
        _session_access[session_id] = time.time()

    return {"session_id": session_id, "state": _serialize_state(state)}


@router.get("/sessions/{session_id}")
async def get_session(session_id: str):
    """Current state of a draft session."""
    return {"session_id": session_id, "state": _serialize_state(_get_session(session_id))}


@router.post("/sessions/{session_id}/actions")
async def apply_action(request: Request, session_id: str, body: ActionRequest):
    """Apply one reducer action.

    While drafting, the response also carries recommendations for the new
    current step when a stats database is available.
    """
    action = _to_action(body)
    _prune_expired_sessions()
    with _sessions_lock:
        state = _sessions.get(session_id)
        if state is None:
            raise HTTPException(status_code=404, detail="Session not found")
        state = draft_reducer(state, action)
        _sessions[session_id] = state
        _session_access[session_id] = time.time()

    response = {"session_id": session_id, "state": _serialize_state(state)}
    if state.phase == DraftPhase.DRAFTING and getattr(request.app.state, "repository", None) is not None:
        response["recommendations"] = _recommendations(request, state)
    return response


@router.get("/sessions/{session_id}/recommendations")
async def get_recommendations(request: Request, session_id: str):
    """Ranked heroes for the session's current step."""
    state = _get_session(session_id)
    if state.phase == DraftPhase.SETUP:
        raise HTTPException(status_code=400, detail="Draft has not started")
    return {
        "session_id": session_id,
        "current_step": state.current_step,
        "current_turn": describe_turn(state.current_step, state.our_team),
        "recommendations": _recommendations(request, state),
    }
