"""
Routing logic for the planner LangGraph workflow.

Each router reads the stage written by the previous node.
"""

import logging
from typing import Literal

from travel_planner.planner.graph.state import TurnState


logger = logging.getLogger(__name__)


def route_after_resolve(state: TurnState) -> Literal["search", "ask"]:
    """
    Send searchable turns to the tool provider, everything else to questions.

    Args:
        state: Current turn state

    Returns:
        "search" if stage == "search", "ask" otherwise
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [router=route_after_resolve] "
    stage = state["stage"]

    if stage == "search":
        logger.info(f"{_log}Routing to 'search'")
        return "search"

    logger.info(f"{_log}Routing to 'ask' | stage={stage}")
    return "ask"


def route_after_search(state: TurnState) -> Literal["recommend", "finalize"]:
    """Go to the route-offer flow only when candidates were found."""
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [router=route_after_search] "
    stage = state["stage"]

    if stage == "recommend":
        logger.info(f"{_log}Routing to 'recommend'")
        return "recommend"

    logger.info(f"{_log}Routing to 'finalize' | no candidates, stage={stage}")
    return "finalize"


def route_after_questions(state: TurnState) -> Literal["search", "finalize"]:
    """Search right away if re-running assumptions completed the trip."""
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [router=route_after_questions] "
    stage = state["stage"]

    if stage == "search":
        logger.info(f"{_log}Routing to 'search' | assumptions completed the trip")
        return "search"

    logger.info(f"{_log}Routing to 'finalize' | stage={stage}")
    return "finalize"
