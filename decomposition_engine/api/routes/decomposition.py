"""Decomposition Routes — tool-call endpoint and per-session engine registry.

Invariants:
    - Body is {action, ...arguments}; response is always the tool envelope
    - Failed envelopes return HTTP 200: they are tool results, not transport errors
    - One DecompositionDispatch per session id, created on first use
    - Routes contain no business logic (dispatch owns it)

Design Decisions:
    - _dispatchers as module-level dict: deliberate exception to no-global-state rule
      (ADR: single-process uvicorn, state lost on restart — persistence is a non-goal)
    - Sync dispatch called from async route: every action is a bounded in-memory
      computation, and the dispatcher lock serializes it
"""

import logging
import threading

from fastapi import APIRouter

from decomposition_engine.config import get_settings
from decomposition_engine.core.decomposition_state import DecompositionState
from decomposition_engine.schemas.decomposition import ToolCallRequest
from decomposition_engine.services.decomposition_dispatch import DecompositionDispatch
from decomposition_engine.services.define_decomposition_tools import ALL_TOOLS

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["decomposition"])

DEFAULT_SESSION = "default"

_dispatchers: dict[str, DecompositionDispatch] = {}
_registry_lock = threading.Lock()


def get_dispatch(session_id: str = DEFAULT_SESSION) -> DecompositionDispatch:
    """Return the session's dispatcher, creating an empty engine on first use."""
    with _registry_lock:
        dispatch = _dispatchers.get(session_id)
        if dispatch is None:
            settings = get_settings()
            dispatch = DecompositionDispatch(
                DecompositionState(strict_depth_cycles=settings.strict_depth_cycles),
                log_summaries=not settings.disable_decomposition_logging,
                session_id=session_id,
            )
            _dispatchers[session_id] = dispatch
            logger.info("Decomposition session created", extra={"session_id": session_id})
        return dispatch


@router.get("/tools")
async def list_tools():
    """Tool definitions for the tool-calling host."""
    return {"tools": ALL_TOOLS}


@router.post("/decomposition")
async def call_default_session(body: ToolCallRequest):
    """Run one action against the default session."""
    return _call(DEFAULT_SESSION, body)


@router.post("/decomposition/sessions/{session_id}")
async def call_session(session_id: str, body: ToolCallRequest):
    """Run one action against a named session."""
    return _call(session_id, body)


def _call(session_id: str, body: ToolCallRequest) -> dict:
    arguments = body.model_dump()
    action = arguments.pop("action")
    return get_dispatch(session_id).execute(action, arguments)
