"""
Search node for the planner graph.

Queries the travel tool provider for flights and stays, scores them with
the current weights and drafts a route when the user asked for one.
"""

import logging
from typing import Any, Dict

from travel_planner.planner.ambiguity import choose_suggested_stay_area
from travel_planner.planner.dialog import push_assumption, push_reasoning
from travel_planner.planner.graph.state import TurnState
from travel_planner.planner.scoring import score_flights, score_stays
from travel_planner.planner.search_inputs import (
    destination_label,
    flight_query,
    origin_label,
    route_query,
    stay_query,
)
from travel_planner.planner.stage import can_draft_route, can_search_flights, can_search_stays
from travel_planner.planner.tools import call_tool


logger = logging.getLogger(__name__)


async def search_node(state: TurnState) -> Dict[str, Any]:
    """
    Run the tool provider calls for the search stage.

    Flights and stays are fetched one after the other. Any tool failure
    propagates as ToolProviderError and aborts the turn.

    Args:
        state: Current turn state (stage == "search")

    Returns:
        Dictionary with state updates to apply
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [node=search] "

    planner_state = state["state"]
    results = state["results"]
    tools = state["tools"]
    config = state["config"]
    dialog = planner_state.dialog
    trip = planner_state.trip
    stage = state["stage"]

    push_reasoning(
        planner_state,
        f"도구 조회 시작: destination='{destination_label(planner_state)}', "
        f"origin='{origin_label(planner_state)}'",
    )

    if can_search_flights(planner_state):
        query = flight_query(planner_state)
        flights = await call_tool(
            "search_flights", lambda: tools.search_flights(query), config, session_id
        )
        results.flights = score_flights(planner_state.weights, flights)
        push_reasoning(planner_state, f"항공 후보 {len(results.flights)}건 스코어링 완료")

    if can_search_stays(planner_state):
        query = stay_query(planner_state)
        stays = await call_tool(
            "search_stays", lambda: tools.search_stays(query), config, session_id
        )
        results.stays = score_stays(planner_state.weights, stays)
        push_reasoning(planner_state, f"숙소 후보 {len(results.stays)}건 스코어링 완료")

    if dialog.route_accepted == "yes" and trip.stay.decided and can_draft_route(planner_state):
        query = route_query(planner_state, trip.stay.area)
        results.route_draft = await call_tool(
            "draft_route", lambda: tools.draft_route(query), config, session_id
        )
        push_reasoning(planner_state, f"동선 초안 {len(results.route_draft)}일 생성")
    elif (
        not state.get("is_blank")
        and dialog.route_accepted == "yes"
        and not trip.stay.decided
        and dialog.stay_question_asked
        and dialog.attempts("q_route_stay_area") >= 1
    ):
        suggested_area = choose_suggested_stay_area(planner_state)
        trip.stay.area = suggested_area
        push_assumption(
            planner_state,
            f"숙소 위치 미정이라 '{suggested_area}' 기준으로 경로/숙소 추천을 준비함",
        )
        query = route_query(planner_state, suggested_area)
        results.route_draft = await call_tool(
            "draft_route", lambda: tools.draft_route(query), config, session_id
        )
        push_reasoning(planner_state, f"숙소 위치 추정 기반으로 동선 {len(results.route_draft)}일을 생성함")

    if results.flights or results.stays:
        stage = "recommend"
        push_reasoning(planner_state, "핵심 후보가 확보되어 추천 단계로 전환함")

    logger.info(
        f"{_log}Node finished | flights={len(results.flights)}, stays={len(results.stays)}, "
        f"route_days={len(results.route_draft)}, stage={stage}"
    )

    return {"state": planner_state, "results": results, "stage": stage}
