"""
Preference signal inference and weight adjustment.

Scans a user turn for keyword sets and turns them into preference deltas,
then applies those deltas to the five scoring weights. Every committed
weight change is explained by a rationale entry.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from travel_planner.planner.gazetteer import (
    BALANCED_PACE_TOKENS,
    BALANCED_TOKENS,
    BUDGET_TOKENS,
    COMFORT_FOCUS_TOKENS,
    LOCATION_FOCUS_TOKENS,
    PREMIUM_TOKENS,
    PURPOSE_KEYWORDS,
    RELAXED_PACE_TOKENS,
    REVIEW_FOCUS_TOKENS,
    ROUTE_FOCUS_TOKENS,
    TIGHT_PACE_TOKENS,
    contains_any,
)
from travel_planner.planner.schemas import (
    BudgetStyle,
    Pace,
    PlannerState,
    WeightKey,
    WeightRationale,
)


logger = logging.getLogger(__name__)


WEIGHT_MIN = 0.05
WEIGHT_MAX = 0.95
RATIONALE_LIMIT = 40


@dataclass
class PreferenceSignals:
    """Preference deltas inferred from one turn. Does not touch state."""

    budget_style: Optional[BudgetStyle] = None
    pace: Optional[Pace] = None
    review_focus: bool = False
    route_focus: bool = False
    location_focus: bool = False
    comfort_focus: bool = False
    purpose_tags: List[str] = field(default_factory=list)


def clamp_weight(value: float, low: float = WEIGHT_MIN, high: float = WEIGHT_MAX) -> float:
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def parse_purpose_tags(text: str) -> List[str]:
    """Return every purpose tag with at least one keyword in text, in table order."""
    return [
        tag for tag, keywords in PURPOSE_KEYWORDS.items() if contains_any(text, keywords)
    ]


def infer_preference_signals(text: str) -> PreferenceSignals:
    """
    Infer preference signals from free text.

    Budget style and pace take the first matching keyword family
    (budget > premium > balanced, tight > relaxed > balanced). The focus
    flags and purpose tags are independent substring checks.

    Args:
        text: Raw user turn

    Returns:
        PreferenceSignals bundle
    """
    lower = text.lower()

    budget_style = None
    if contains_any(lower, BUDGET_TOKENS):
        budget_style = "budget"
    elif contains_any(lower, PREMIUM_TOKENS):
        budget_style = "premium"
    elif contains_any(lower, BALANCED_TOKENS):
        budget_style = "balanced"

    pace = None
    if contains_any(lower, TIGHT_PACE_TOKENS):
        pace = "tight"
    elif contains_any(lower, RELAXED_PACE_TOKENS):
        pace = "relaxed"
    elif contains_any(lower, BALANCED_PACE_TOKENS):
        pace = "balanced"

    return PreferenceSignals(
        budget_style=budget_style,
        pace=pace,
        review_focus=contains_any(text, REVIEW_FOCUS_TOKENS),
        route_focus=contains_any(text, ROUTE_FOCUS_TOKENS),
        location_focus=contains_any(text, LOCATION_FOCUS_TOKENS),
        comfort_focus=contains_any(text, COMFORT_FOCUS_TOKENS),
        purpose_tags=parse_purpose_tags(text),
    )


def add_rationale(
    state: PlannerState,
    key: WeightKey,
    reason: str,
    limit: int = RATIONALE_LIMIT,
) -> None:
    rationale = state.weight_rationale
    rationale.append(WeightRationale(key=key, reason=reason))
    if len(rationale) > limit:
        del rationale[:-limit]


def adjust_weight(state: PlannerState, key: WeightKey, delta: float, reason: str) -> bool:
    """
    Nudge one weight by delta, clamped to [0.05, 0.95].

    The new value is rounded to 3 decimals. Nothing is recorded when the
    clamp absorbs the whole delta.

    Args:
        state: Planner state to mutate
        key: Weight to adjust
        delta: Signed change
        reason: Human-readable rationale

    Returns:
        True if the weight changed
    """
    before = getattr(state.weights, key)
    after = clamp_weight(round(before + delta, 3))
    if after == before:
        return False

    setattr(state.weights, key, after)
    add_rationale(state, key, reason)
    logger.debug(f"Weight adjusted | key={key}, {before} -> {after}, reason={reason}")
    return True


def apply_preference_signals(state: PlannerState, signals: PreferenceSignals) -> PlannerState:
    """
    Apply inferred signals to the trip state and weights.

    Budget style and pace overwrite the trip fields and trigger compound
    weight adjustments, each logged separately. Purpose tags are merged
    into the existing tags and never removed.
    """
    trip = state.trip

    if signals.budget_style:
        trip.budget_style = signals.budget_style
        if signals.budget_style == "budget":
            adjust_weight(state, "price", 0.12, "사용자가 가성비/최저가 선호를 언급함")
            adjust_weight(state, "comfort", -0.05, "가격 우선 응답으로 편의 가중치를 소폭 낮춤")
        elif signals.budget_style == "premium":
            adjust_weight(state, "comfort", 0.12, "사용자가 프리미엄 성향을 언급함")
            adjust_weight(state, "price", -0.06, "프리미엄 선호로 가격 가중치를 조정함")
            adjust_weight(state, "review", 0.03, "고급 숙소/항공 선택 시 후기 중요도가 함께 상승")
        elif signals.budget_style == "balanced":
            adjust_weight(state, "price", 0.03, "가격/퀄리티 균형 선호를 반영함")
            adjust_weight(state, "comfort", 0.03, "가격/퀄리티 균형 선호를 반영함")

    if signals.review_focus:
        adjust_weight(state, "review", 0.1, "사용자가 후기/평점을 중시한다고 언급함")
    if signals.route_focus:
        adjust_weight(state, "route", 0.1, "사용자가 동선/이동 최소화를 원함")
    if signals.location_focus:
        adjust_weight(state, "location", 0.1, "사용자가 위치/접근성을 중요하게 언급함")
    if signals.comfort_focus:
        adjust_weight(state, "comfort", 0.1, "사용자가 편의/등급을 중요하게 언급함")

    if signals.pace:
        trip.pace = signals.pace
        if signals.pace == "tight":
            adjust_weight(state, "route", 0.05, "빡빡한 일정 선호로 동선 효율 가중치를 올림")
        elif signals.pace == "relaxed":
            adjust_weight(state, "comfort", 0.03, "여유로운 일정 선호로 편안함 가중치를 올림")
            adjust_weight(state, "route", -0.03, "이동 최소 압박을 소폭 완화함")

    if signals.purpose_tags:
        merged = list(trip.purpose_tags)
        for tag in signals.purpose_tags:
            if tag not in merged:
                merged.append(tag)
        trip.purpose_tags = merged

    return state
