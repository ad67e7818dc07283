"""
Extraction node for the planner graph.

Copies the previous state and runs every field extractor on the user turn.
"""

import logging
from typing import Any, Dict

from travel_planner.planner.extraction import apply_text_update
from travel_planner.planner.graph.state import TurnState
from travel_planner.planner.schemas import Results
from travel_planner.planner.stage import derive_stage


logger = logging.getLogger(__name__)


def extract_node(state: TurnState) -> Dict[str, Any]:
    """
    Apply the user turn to a deep copy of the previous planner state.

    The caller's state object is never mutated, so a failure later in the
    turn leaves it intact.

    Args:
        state: Current turn state

    Returns:
        Dictionary with state updates to apply
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [node=extract] "

    user_text = state.get("user_text", "")
    planner_state = state["prev_state"].model_copy(deep=True)

    apply_text_update(planner_state, user_text, state.get("today"))
    stage = derive_stage(planner_state)

    logger.info(
        f"{_log}Node finished | stage={stage}, "
        f"purpose_tags={planner_state.trip.purpose_tags}, "
        f"region={planner_state.trip.region.free_text!r}"
    )

    return {
        "state": planner_state,
        "stage": stage,
        "is_blank": not user_text.strip(),
        "questions": [],
        "results": Results(),
        "response": None,
    }
