"""
Recommend node for the planner graph.

Drives the route-offer sub-flow once candidates exist: offers a route
draft, asks where the user will stay, and drafts the route when ready.
"""

import logging
from typing import Any, Dict

from travel_planner.planner.ambiguity import choose_suggested_stay_area
from travel_planner.planner.dialog import push_assumption, push_reasoning
from travel_planner.planner.graph.state import TurnState
from travel_planner.planner.questions import build_recommend_questions
from travel_planner.planner.search_inputs import route_query
from travel_planner.planner.stage import can_draft_route
from travel_planner.planner.tools import call_tool


logger = logging.getLogger(__name__)


def _apply_recommend_defaults(turn: TurnState) -> None:
    """Assume answers to route-offer questions the user skipped."""
    planner_state = turn["state"]
    dialog = planner_state.dialog
    trip = planner_state.trip

    if dialog.route_accepted == "unknown" and dialog.attempts("q_route_offer") >= 1:
        dialog.route_accepted = "yes"
        push_assumption(planner_state, "경로 제안 질문 응답이 모호해 기본적으로 경로 추천을 계속 진행함")

    if (
        dialog.route_accepted == "yes"
        and not trip.stay.decided
        and dialog.attempts("q_route_stay_area") >= 1
    ):
        suggested_area = choose_suggested_stay_area(planner_state)
        trip.stay.area = suggested_area
        push_assumption(planner_state, f"숙소 위치 답변이 모호해 '{suggested_area}' 기준으로 경로를 우선 제안함")


async def recommend_node(state: TurnState) -> Dict[str, Any]:
    """
    Ask the route-offer questions or draft the route.

    Args:
        state: Current turn state (stage == "recommend")

    Returns:
        Dictionary with state updates to apply
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [node=recommend] "

    planner_state = state["state"]
    results = state["results"]
    config = state["config"]
    dialog = planner_state.dialog
    trip = planner_state.trip
    questions = []

    if not state.get("is_blank"):
        _apply_recommend_defaults(state)

    recommend_questions = build_recommend_questions(planner_state, config.max_recommend_questions)
    if recommend_questions:
        questions = recommend_questions
        question_ids = {question.id for question in recommend_questions}
        if "q_route_offer" in question_ids:
            dialog.route_proposal_asked = True
        if "q_route_stay_area" in question_ids:
            dialog.stay_question_asked = True
    elif (
        dialog.route_accepted == "yes"
        and not results.route_draft
        and can_draft_route(planner_state)
        and (
            trip.stay.decided
            or (dialog.stay_question_asked and dialog.attempts("q_route_stay_area") >= 1)
        )
    ):
        stay_area = trip.stay.area if trip.stay.decided else choose_suggested_stay_area(planner_state)
        query = route_query(planner_state, stay_area)
        tools = state["tools"]
        results.route_draft = await call_tool(
            "draft_route", lambda: tools.draft_route(query), config, session_id
        )
        push_reasoning(planner_state, f"경로 추천 요청에 따라 동선 {len(results.route_draft)}일을 생성함")

    logger.info(
        f"{_log}Node finished | route_accepted={dialog.route_accepted}, "
        f"question_ids={[question.id for question in questions]}, "
        f"route_days={len(results.route_draft)}"
    )

    return {"state": planner_state, "questions": questions, "results": results}
