"""
Stage derivation for the planner conversation.

The stage is recomputed from trip-state completeness on every turn, so a
field cleared by the user naturally sends the conversation back to an
earlier stage. `recommend` is never derived here; the engine promotes a
successful search to it.
"""

from travel_planner.planner.schemas import PlannerState, Stage


def has_intent(state: PlannerState) -> bool:
    return len(state.trip.purpose_tags) > 0


def has_region(state: PlannerState) -> bool:
    region = state.trip.region
    return bool(region.country or region.city or region.free_text)


def has_dates(state: PlannerState) -> bool:
    dates = state.trip.dates
    return bool(dates.start and dates.end)


def has_travelers(state: PlannerState) -> bool:
    return state.trip.travelers.adults >= 1


def has_budget_or_comfort(state: PlannerState) -> bool:
    trip = state.trip
    return any(
        value is not None
        for value in (trip.budget_style, trip.stay_level, trip.seat_class, trip.pace)
    )


def has_origin_or_undecided(state: PlannerState) -> bool:
    origin = state.trip.origin
    if origin.city or origin.airport_code:
        return True
    return len(origin.free_text.strip()) > 0


def can_search_flights(state: PlannerState) -> bool:
    return has_region(state) and has_dates(state) and has_origin_or_undecided(state)


def can_search_stays(state: PlannerState) -> bool:
    return has_region(state) and has_dates(state) and has_travelers(state)


def can_draft_route(state: PlannerState) -> bool:
    return has_region(state) and has_dates(state)


def derive_stage(state: PlannerState) -> Stage:
    """
    Map trip completeness to the first unmet conversation stage.

    Precedence: collect_intent -> collect_region -> collect_dates ->
    collect_weights -> search.

    Args:
        state: Current planner state

    Returns:
        The derived stage (never "recommend")
    """
    if not has_intent(state):
        return "collect_intent"

    if not has_region(state):
        return "collect_region"

    if not has_dates(state):
        return "collect_dates"

    if (
        not has_travelers(state)
        or not has_budget_or_comfort(state)
        or not has_origin_or_undecided(state)
    ):
        return "collect_weights"

    if can_search_flights(state) or can_search_stays(state):
        return "search"

    return "collect_weights"


def is_collect_stage(stage: str) -> bool:
    return stage.startswith("collect")
