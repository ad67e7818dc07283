"""
Finalize node for the planner graph.

Records the asked questions and assembles the validated agent_response.
"""

import logging
from typing import Any, Dict, List

from travel_planner.planner.dialog import remember_asked_questions
from travel_planner.planner.graph.state import TurnState
from travel_planner.planner.schemas import Results
from travel_planner.shared.contracts.agent_response import AgentResponse, UICard, UIPayload


logger = logging.getLogger(__name__)

FLIGHT_CTA_LABEL = "예매하러 가기"
STAY_CTA_LABEL = "예약하러 가기"
MAX_CARDS_PER_KIND = 2


def build_ui_cards(results: Results) -> List[UICard]:
    """Shortcut cards for the top two flights and the top two stays."""
    cards = [
        UICard(type="flight", ref_id=flight.id, cta_label=FLIGHT_CTA_LABEL)
        for flight in results.flights[:MAX_CARDS_PER_KIND]
    ]
    cards.extend(
        UICard(type="stay", ref_id=stay.id, cta_label=STAY_CTA_LABEL)
        for stay in results.stays[:MAX_CARDS_PER_KIND]
    )
    return cards


def finalize_node(state: TurnState) -> Dict[str, Any]:
    """
    Build the turn's agent_response.

    The response is re-validated against the contract; a ValidationError
    here means the engine produced an invalid state and is raised as-is.

    Args:
        state: Current turn state

    Returns:
        Dictionary with state updates to apply
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [node=finalize] "

    planner_state = state["state"]
    config = state["config"]
    results = state.get("results") or Results()
    questions = list(state.get("questions") or [])[: config.max_questions]

    remember_asked_questions(planner_state, [question.id for question in questions])

    draft = AgentResponse(
        stage=state["stage"],
        questions=questions,
        state=planner_state,
        results=results,
        ui=UIPayload(cards=build_ui_cards(results)),
    )
    response = AgentResponse.model_validate(draft.to_wire())

    logger.info(
        f"{_log}Response ready | stage={response.stage}, "
        f"questions={len(response.questions)}, cards={len(response.ui.cards)}"
    )

    return {"state": planner_state, "questions": questions, "response": response}
