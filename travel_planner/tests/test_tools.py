"""
Unit tests for the tool layer.

Tests the guarded call wrapper (timeouts, retries, error wrapping), the
mock provider and the query builders.
"""

import asyncio

import pytest

from travel_planner.planner.errors import ToolProviderError
from travel_planner.planner.graph.config import PlannerConfig
from travel_planner.planner.mock_data import MockTravelToolProvider, hash_seed
from travel_planner.planner.search_inputs import (
    destination_label,
    flight_query,
    origin_label,
    route_query,
    stay_query,
    trip_days,
)
from travel_planner.planner.tools import (
    FlightSearchInput,
    RouteDraftInput,
    StaySearchInput,
    call_tool,
)


def _fast_config(**overrides):
    values = dict(tool_timeout=1.0, tool_max_retries=1, retry_min_wait=0, retry_max_wait=0)
    values.update(overrides)
    return PlannerConfig(**values)


def _flight_input(**overrides):
    values = dict(
        origin="ICN",
        destination="Tokyo",
        start_date="2026-03-10",
        end_date="2026-03-13",
        adults=1,
        children=0,
    )
    values.update(overrides)
    return FlightSearchInput(**values)


def _stay_input(**overrides):
    values = dict(
        destination="Tokyo",
        start_date="2026-03-10",
        end_date="2026-03-13",
        adults=2,
        children=0,
    )
    values.update(overrides)
    return StaySearchInput(**values)


class TestCallTool:
    """Tests for call_tool."""

    def test_returns_result(self):
        async def call():
            return ["ok"]

        assert asyncio.run(call_tool("search_flights", call, _fast_config())) == ["ok"]

    def test_transient_failure_is_retried(self):
        attempts = []

        async def call():
            attempts.append(1)
            if len(attempts) == 1:
                raise ConnectionError("connection reset")
            return "recovered"

        result = asyncio.run(call_tool("search_stays", call, _fast_config()))
        assert result == "recovered"
        assert len(attempts) == 2

    def test_retries_exhausted(self):
        attempts = []

        async def call():
            attempts.append(1)
            raise ConnectionError("down")

        with pytest.raises(ToolProviderError) as exc_info:
            asyncio.run(call_tool("search_stays", call, _fast_config(tool_max_retries=2)))

        assert exc_info.value.tool_name == "search_stays"
        assert len(attempts) == 3

    def test_non_transient_failure_is_not_retried(self):
        attempts = []

        async def call():
            attempts.append(1)
            raise ValueError("bad payload")

        with pytest.raises(ToolProviderError, match="bad payload"):
            asyncio.run(call_tool("draft_route", call, _fast_config()))
        assert len(attempts) == 1

    def test_timeout(self):
        async def call():
            await asyncio.sleep(1)

        config = _fast_config(tool_timeout=0.01, tool_max_retries=0)
        with pytest.raises(ToolProviderError, match="timed out"):
            asyncio.run(call_tool("search_flights", call, config))


class TestMockProvider:
    """Tests for MockTravelToolProvider."""

    def setup_method(self):
        self.provider = MockTravelToolProvider()

    def test_hash_seed_is_deterministic(self):
        assert hash_seed("Tokyo") == hash_seed("Tokyo")
        assert 0 <= hash_seed("Tokyo-2026-03-10") < 100000

    def test_flights(self):
        flights = asyncio.run(self.provider.search_flights(_flight_input()))
        assert [flight.id for flight in flights] == ["f_1", "f_2", "f_3"]
        assert all(flight.score == 0 for flight in flights)
        assert flights[1].price.amount < flights[0].price.amount < flights[2].price.amount
        assert flights[0].url.startswith("https://www.google.com/travel/flights?q=")

    def test_same_query_same_prices(self):
        first = asyncio.run(self.provider.search_flights(_flight_input()))
        second = asyncio.run(self.provider.search_flights(_flight_input()))
        assert [f.price.amount for f in first] == [f.price.amount for f in second]

    def test_direct_only_filter(self):
        flights = asyncio.run(self.provider.search_flights(_flight_input(max_transfers=0)))
        assert [flight.id for flight in flights] == ["f_1", "f_3"]

    @pytest.mark.parametrize("level,expected", [
        (None, ["h_1", "h_2", "h_3"]),
        ("4_star", ["h_1", "h_2", "h_3"]),
        ("3_star", ["h_1", "h_2"]),
        ("5_star", ["h_3", "h_1"]),
        ("pool_villa", ["h_3", "h_1"]),
    ])
    def test_stays_by_level(self, level, expected):
        stays = asyncio.run(self.provider.search_stays(_stay_input(stay_level=level)))
        assert [stay.id for stay in stays] == expected

    def test_booking_url_carries_dates(self):
        stays = asyncio.run(self.provider.search_stays(_stay_input()))
        assert "checkin=2026-03-10" in stays[0].url
        assert "group_adults=2" in stays[0].url

    def test_route_is_capped(self):
        query = RouteDraftInput(
            destination="Tokyo",
            purpose_tags=["food"],
            must_visit=["시부야"],
            days=6,
            stay_area="역세권",
        )
        route = asyncio.run(self.provider.draft_route(query))
        assert [day.day for day in route] == [1, 2, 3]
        assert route[0].items[0].name == "숙소 체크인 (역세권)"
        assert route[0].items[1].name == "시부야"
        assert route[0].items[2].name == "현지 인기 맛집"

    def test_route_defaults(self):
        query = RouteDraftInput(destination="Jeju", purpose_tags=[], must_visit=[], days=2)
        route = asyncio.run(self.provider.draft_route(query))
        assert len(route) == 2
        assert route[0].items[1].name == "메인 스팟"
        assert route[1].items[2].name == "핵심 관광지"


class TestSearchInputs:
    """Tests for the query builders."""

    def test_labels(self, ready_state, fresh_state):
        assert destination_label(ready_state) == "Tokyo"
        assert origin_label(ready_state) == "ICN"
        assert destination_label(fresh_state) == "미정"
        assert origin_label(fresh_state) == "미정"

    @pytest.mark.parametrize("start,end,expected", [
        ("2026-03-10", "2026-03-13", 3),
        ("2026-03-10", "2026-03-10", 1),
        ("2026-03-13", "2026-03-10", 1),
        ("", "2026-03-10", 1),
    ])
    def test_trip_days(self, start, end, expected):
        assert trip_days(start, end) == expected

    def test_flight_query(self, ready_state):
        ready_state.trip.constraints.max_transfers = 0
        query = flight_query(ready_state)
        assert (query.origin, query.destination, query.seat_class) == ("ICN", "Tokyo", "economy")
        assert query.max_transfers == 0

    def test_stay_and_route_queries(self, ready_state):
        ready_state.trip.stay_level = "5_star"
        assert stay_query(ready_state).stay_level == "5_star"

        route = route_query(ready_state, "시내 중심")
        assert route.days == 3
        assert route.stay_area == "시내 중심"
        assert route.purpose_tags == ["food"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
