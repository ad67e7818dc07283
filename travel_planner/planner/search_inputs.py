"""
Builders for tool provider queries.

Translates the planner state into the three tool inputs, including the
display labels used for the destination and origin.
"""

from datetime import date
from typing import Optional

from travel_planner.planner.schemas import UNDECIDED, PlannerState
from travel_planner.planner.tools import FlightSearchInput, RouteDraftInput, StaySearchInput


def destination_label(state: PlannerState) -> str:
    region = state.trip.region
    return region.city or region.free_text or region.country or UNDECIDED


def origin_label(state: PlannerState) -> str:
    """Airport code, then city, then free text, else "미정"."""
    origin = state.trip.origin
    return origin.airport_code or origin.city or origin.free_text or UNDECIDED


def trip_days(start: str, end: str) -> int:
    """Whole days between start and end (at least 1; 1 when unparseable)."""
    try:
        start_date = date.fromisoformat(start)
        end_date = date.fromisoformat(end)
    except ValueError:
        return 1
    if end_date <= start_date:
        return 1
    return max(1, (end_date - start_date).days)


def flight_query(state: PlannerState) -> FlightSearchInput:
    trip = state.trip
    return FlightSearchInput(
        origin=origin_label(state),
        destination=destination_label(state),
        start_date=trip.dates.start,
        end_date=trip.dates.end,
        adults=trip.travelers.adults,
        children=trip.travelers.children,
        seat_class=trip.seat_class or "economy",
        max_transfers=trip.constraints.max_transfers,
    )


def stay_query(state: PlannerState) -> StaySearchInput:
    trip = state.trip
    return StaySearchInput(
        destination=destination_label(state),
        start_date=trip.dates.start,
        end_date=trip.dates.end,
        adults=trip.travelers.adults,
        children=trip.travelers.children,
        stay_level=trip.stay_level,
    )


def route_query(state: PlannerState, stay_area: Optional[str]) -> RouteDraftInput:
    trip = state.trip
    return RouteDraftInput(
        destination=destination_label(state),
        purpose_tags=list(trip.purpose_tags),
        must_visit=list(trip.constraints.must_visit),
        max_daily_walk_km=trip.constraints.max_daily_walk_km,
        days=trip_days(trip.dates.start, trip.dates.end),
        stay_area=stay_area,
    )
