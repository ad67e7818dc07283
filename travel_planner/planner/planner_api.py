"""
FastAPI endpoints for the planner agent.

Provides REST API for running conversational turns and inspecting or
deleting the persisted planner state of a session.
"""

import logging
import time
import uuid
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from travel_planner.planner.engine import run_planner_engine
from travel_planner.planner.errors import ToolProviderError
from travel_planner.planner.graph.config import PlannerConfig, load_config_from_env
from travel_planner.planner.store import PlannerStateStore
from travel_planner.shared.logging import get_or_create_history, remove_history


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/planner", tags=["planner"])

# Shared config and state store (created on first use from the environment)
_config: Optional[PlannerConfig] = None
_store: Optional[PlannerStateStore] = None


def get_planner_config() -> PlannerConfig:
    """Get or load the planner config used by every turn."""
    global _config
    if _config is None:
        _config = load_config_from_env()
    return _config


def get_store() -> PlannerStateStore:
    """Get or create the shared state store."""
    global _store
    if _store is None:
        _store = PlannerStateStore(get_planner_config().state_dir)
    return _store


# ============================================================================
# Request/Response Models
# ============================================================================


class TurnRequest(BaseModel):
    """One user message for a planner session."""

    session_id: Optional[str] = Field(
        default=None,
        pattern=r"^[A-Za-z0-9_-]{1,128}$",
        description="Existing session id. A new session is created if omitted.",
    )
    text: str = Field(min_length=1, description="User message")


class TurnResponse(BaseModel):
    """Planner output for one turn."""

    session_id: str = Field(description="Session identifier")
    response: Dict[str, Any] = Field(description="agent_response payload (camelCase)")


class SessionStateResponse(BaseModel):
    """Persisted planner state of a session."""

    session_id: str
    exists: bool
    state: Optional[Dict[str, Any]] = None


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/turn", response_model=TurnResponse)
async def run_turn(request: TurnRequest) -> TurnResponse:
    """
    Run one conversational turn.

    Loads the session state, runs the planner engine and saves the new
    state. On failure the stored state is left untouched.

    Args:
        request: Session id (optional) and user text

    Returns:
        Session id and the agent_response payload
    """
    api_start_time = time.perf_counter()
    session_id = request.session_id or uuid.uuid4().hex
    _log = f"[session={session_id}] [api=/api/planner/turn] "

    config = get_planner_config()
    store = get_store()
    history = get_or_create_history(session_id)

    async with store.lock(session_id):
        prev_state = store.load(session_id)
        history.append_user(request.text)

        try:
            output = await run_planner_engine(
                prev_state, request.text, config=config, session_id=session_id
            )
            store.save(session_id, output.state)
        except ToolProviderError as e:
            logger.error(f"{_log}Tool provider failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Travel tool provider failed: {str(e)}",
            )
        except Exception as e:
            logger.exception(f"{_log}Turn failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to process turn: {str(e)}",
            )

    payload = output.response.to_wire()
    history.append_assistant(payload)

    api_duration_ms = (time.perf_counter() - api_start_time) * 1000
    logger.info(f"{_log}Turn served | stage={output.response.stage}, duration={api_duration_ms:.0f}ms")

    return TurnResponse(session_id=session_id, response=payload)


@router.get("/session/{session_id}", response_model=SessionStateResponse)
async def get_session_state(session_id: str) -> SessionStateResponse:
    """
    Get the persisted planner state of a session.

    Args:
        session_id: Session identifier

    Returns:
        State snapshot, or exists=False if nothing is stored
    """
    store = get_store()
    try:
        exists = store.exists(session_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not exists:
        return SessionStateResponse(session_id=session_id, exists=False)

    return SessionStateResponse(
        session_id=session_id,
        exists=True,
        state=store.load(session_id).to_wire(),
    )


@router.delete("/session/{session_id}")
async def delete_session(session_id: str) -> Dict[str, str]:
    """
    Delete the persisted planner state of a session.

    Args:
        session_id: Session identifier

    Returns:
        Confirmation message
    """
    store = get_store()
    try:
        async with store.lock(session_id):
            deleted = store.delete(session_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )

    remove_history(session_id)
    return {"message": f"Session {session_id} deleted"}


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": "planner-agent",
    }
