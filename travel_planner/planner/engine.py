"""
Planner engine entry point.

Runs one conversational turn through the compiled planner graph:
previous state + user text in, new state + validated agent_response out.
"""

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Optional

from travel_planner.planner.graph.build import create_planner_graph
from travel_planner.planner.graph.config import DEFAULT_CONFIG, PlannerConfig
from travel_planner.planner.mock_data import MockTravelToolProvider
from travel_planner.planner.schemas import PlannerState
from travel_planner.planner.tools import TravelToolProvider
from travel_planner.shared.contracts.agent_response import AgentResponse
from travel_planner.shared.logging import log_state_transition


logger = logging.getLogger(__name__)

# Compiled graph instance (shared across turns)
_graph = None


def get_graph():
    """Get or create the shared graph instance."""
    global _graph
    if _graph is None:
        _graph = create_planner_graph()
    return _graph


@dataclass
class PlannerEngineOutput:
    state: PlannerState
    response: AgentResponse


async def run_planner_engine(
    prev_state: PlannerState,
    user_text: str,
    tools: Optional[TravelToolProvider] = None,
    config: Optional[PlannerConfig] = None,
    session_id: Optional[str] = None,
    today: Optional[date] = None,
) -> PlannerEngineOutput:
    """
    Process one user turn.

    `prev_state` is never mutated; the returned state is a new object.
    Errors (tool failures, response validation) propagate to the caller,
    which should then keep its previous state.

    Args:
        prev_state: State persisted after the previous turn
        user_text: Raw user message (may be empty)
        tools: Travel tool provider. Uses MockTravelToolProvider if not provided.
        config: Planner configuration. Uses DEFAULT_CONFIG if not provided.
        session_id: Session id for log context
        today: Reference date for relative dates (defaults to the UTC date)

    Returns:
        PlannerEngineOutput with the new state and the validated response

    Raises:
        ToolProviderError: If a tool provider call failed
        pydantic.ValidationError: If the assembled response breaks the contract
    """
    if tools is None:
        tools = MockTravelToolProvider()
    if config is None:
        config = DEFAULT_CONFIG

    session_id = session_id or "unknown"
    _log = f"[session={session_id}] [graph=planner] [engine] "

    turn = {
        "session_id": session_id,
        "user_text": user_text or "",
        "today": today,
        "prev_state": prev_state,
        "tools": tools,
        "config": config,
    }
    log_state_transition("turn_start", {"session_id": session_id, "state": prev_state}, logger=logger)

    start_time = time.perf_counter()
    graph = get_graph()
    result = await graph.ainvoke(turn, {"recursion_limit": config.recursion_limit})

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"{_log}Turn complete | stage={result['stage']}, duration={duration_ms:.0f}ms")
    log_state_transition("turn_complete", result, extra={"duration_ms": round(duration_ms)}, logger=logger)

    return PlannerEngineOutput(state=result["state"], response=result["response"])
