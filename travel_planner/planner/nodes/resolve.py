"""
Ambiguity node for the planner graph.

Injects assumptions for the derived stage, then re-derives it.
"""

import logging
from typing import Any, Dict

from travel_planner.planner.ambiguity import apply_ambiguity_assumptions
from travel_planner.planner.graph.state import TurnState
from travel_planner.planner.stage import derive_stage


logger = logging.getLogger(__name__)


def resolve_node(state: TurnState) -> Dict[str, Any]:
    """
    Run the ambiguity resolver once after extraction.

    Blank turns skip resolution so an empty message never changes the trip.
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [node=resolve] "

    stage = state["stage"]
    if state.get("is_blank"):
        logger.info(f"{_log}Blank turn, skipping assumptions | stage={stage}")
        return {"stage": stage}

    planner_state = state["state"]
    apply_ambiguity_assumptions(planner_state, state.get("user_text", ""), stage, state.get("today"))
    new_stage = derive_stage(planner_state)

    if new_stage != stage:
        logger.info(f"{_log}Stage advanced by assumptions | {stage} -> {new_stage}")
    else:
        logger.info(f"{_log}Node finished | stage={stage}")

    return {"state": planner_state, "stage": new_stage}
