"""
Ambiguity resolution through assumption injection.

When a stage's required fields are still missing after the user has been
asked once (or the user explicitly says they don't know), a best-guess
default is written into the state so the conversation can move on. Every
injected default is recorded in dialog.assumptions and the reasoning log.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from travel_planner.planner.dialog import push_assumption
from travel_planner.planner.extraction import (
    DEFAULT_TRIP_DAYS,
    is_urgent,
    parse_budget_style_from_amount,
    parse_trip_duration_days,
    synthesize_dates,
)
from travel_planner.planner.gazetteer import (
    HURRIED_PATTERN,
    RELAX_PATTERN,
    UNKNOWN_DESTINATION_TOKENS,
    contains_any,
)
from travel_planner.planner.schemas import UNDECIDED, PlannerState, Stage
from travel_planner.planner.stage import (
    has_dates,
    has_intent,
    has_origin_or_undecided,
    has_region,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackRegion:
    city: str
    country: str
    reason: str


def choose_fallback_region(state: PlannerState) -> FallbackRegion:
    """
    Pick a destination for a user with no preference.

    First matching rule wins: budget+relax, budget, relax, default.
    """
    trip = state.trip
    wants_relax = "relax" in trip.purpose_tags

    if trip.budget_style == "budget" and wants_relax:
        return FallbackRegion("Fukuoka", "Japan", "가성비+휴식 조합에서 단거리/비용 균형이 좋아 우선 제안")

    if trip.budget_style == "budget":
        return FallbackRegion("Osaka", "Japan", "가성비 우선 기준으로 항공/숙박 옵션이 풍부한 목적지")

    if wants_relax:
        return FallbackRegion("Jeju", "South Korea", "휴식 목적 기준으로 이동 부담이 낮은 목적지")

    return FallbackRegion("Tokyo", "Japan", "목적지 미정 시 기본 탐색 목적지")


def choose_suggested_stay_area(state: PlannerState) -> str:
    """Suggest a stay area label when the user has not decided one."""
    if state.trip.stay.area:
        return state.trip.stay.area
    if "relax" in state.trip.purpose_tags:
        return "해변 근처"
    if "food" in state.trip.purpose_tags:
        return "핫플 상권 근처"
    if state.weights.route >= 0.3:
        return "역세권"
    return "시내 중심"


def _resolve_intent(state: PlannerState, user_text: str) -> bool:
    trip = state.trip
    if state.dialog.attempts("q_trip_purpose") < 1:
        return False

    state.dialog.offer_diverse_options = True

    if not trip.purpose_tags:
        if re.search(RELAX_PATTERN, user_text, re.IGNORECASE):
            trip.purpose_tags = ["relax"]
        else:
            trip.purpose_tags = ["relax", "sightseeing"]
        push_assumption(state, f"목적 응답이 모호해 기본 목적을 '{trip.purpose_tags[0]}'로 가정함")

    if trip.budget_style is None:
        trip.budget_style = parse_budget_style_from_amount(user_text) or "balanced"
        push_assumption(state, f"예산 정보가 불완전해 '{trip.budget_style}' 성향으로 임시 설정함")

    if trip.pace is None:
        trip.pace = "tight" if re.search(HURRIED_PATTERN, user_text, re.IGNORECASE) else "balanced"
        push_assumption(state, f"일정 밀도를 '{trip.pace}'로 임시 설정함")

    return True


def _resolve_region(state: PlannerState, user_text: str) -> bool:
    user_undecided = contains_any(user_text.lower(), UNKNOWN_DESTINATION_TOKENS)
    if not user_undecided and state.dialog.attempts("q_destination_region") < 1:
        return False

    fallback = choose_fallback_region(state)
    region = state.trip.region
    region.city = fallback.city
    region.country = fallback.country
    region.free_text = f"{fallback.city}, {fallback.country}"
    push_assumption(
        state,
        f"목적지가 미정이라 '{fallback.city}' 기준으로 우선 검색을 진행함 ({fallback.reason})",
    )
    return True


def _resolve_dates(state: PlannerState, user_text: str, today: Optional[date]) -> bool:
    duration = parse_trip_duration_days(user_text)
    if not (is_urgent(user_text) or state.dialog.attempts("q_date_range") >= 1 or duration is not None):
        return False

    days = duration or DEFAULT_TRIP_DAYS
    synthesize_dates(state, user_text, days, today)
    push_assumption(
        state,
        f"정확한 날짜가 없어 {state.trip.dates.start} 출발 가정으로 {days}일 일정을 임시 확정함",
    )
    return True


def _resolve_origin(state: PlannerState) -> bool:
    if state.dialog.attempts("q_origin") < 1:
        return False

    state.trip.origin.free_text = UNDECIDED
    push_assumption(state, "출발지가 비어 있어 항공 검색은 '출발지 미정' 조건으로 진행함")
    return True


def apply_ambiguity_assumptions(
    state: PlannerState,
    user_text: str,
    stage: Stage,
    today: Optional[date] = None,
) -> PlannerState:
    """
    Inject defaults for the current stage when the user is stuck.

    Never guesses on the very first ask: each branch needs one prior
    attempt at the stage's primary question, or an explicit signal in the
    text (undecided destination, urgency, explicit trip length).

    Args:
        state: Planner state to mutate
        user_text: Raw user turn
        stage: Stage derived after extraction
        today: Reference date for synthesized dates

    Returns:
        The same state instance
    """
    resolved = False

    if stage == "collect_intent" and not has_intent(state):
        resolved = _resolve_intent(state, user_text)
    elif stage == "collect_region" and not has_region(state):
        resolved = _resolve_region(state, user_text)
    elif stage == "collect_dates" and not has_dates(state):
        resolved = _resolve_dates(state, user_text, today)
    elif stage == "collect_weights" and not has_origin_or_undecided(state):
        resolved = _resolve_origin(state)

    if resolved:
        logger.debug(f"Assumptions injected | stage={stage}")
    return state
