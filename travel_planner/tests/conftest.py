"""Shared fixtures for the planner tests."""

from datetime import date

import pytest

from travel_planner.planner.schemas import PlannerState, initial_state


FIXED_TODAY = date(2026, 3, 1)


def make_ready_state() -> PlannerState:
    """A state with every slot filled for Tokyo out of ICN (stage "search")."""
    state = initial_state()
    state.trip.purpose_tags = ["food"]
    state.trip.region.city = "Tokyo"
    state.trip.region.country = "Japan"
    state.trip.region.free_text = "Tokyo, Japan"
    state.trip.dates.start = "2026-03-10"
    state.trip.dates.end = "2026-03-13"
    state.trip.origin.airport_code = "ICN"
    state.trip.origin.city = "Seoul"
    state.trip.budget_style = "balanced"
    return state


@pytest.fixture
def fresh_state() -> PlannerState:
    return initial_state()


@pytest.fixture
def ready_state() -> PlannerState:
    return make_ready_state()


@pytest.fixture
def today() -> date:
    return FIXED_TODAY
