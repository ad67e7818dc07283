"""
Unit tests for the ambiguity resolver.

Tests that defaults are only injected after one prior ask (or an explicit
signal), and that every injected default is recorded as an assumption.
"""

import pytest

from travel_planner.planner.ambiguity import (
    apply_ambiguity_assumptions,
    choose_fallback_region,
    choose_suggested_stay_area,
)


class TestIntentAssumptions:
    """Tests for the collect_intent branch."""

    def test_first_ask_injects_nothing(self, fresh_state):
        apply_ambiguity_assumptions(fresh_state, "안녕", "collect_intent")
        assert fresh_state.trip.purpose_tags == []
        assert fresh_state.dialog.assumptions == []

    def test_second_ask_injects_defaults(self, fresh_state):
        fresh_state.dialog.question_attempts["q_trip_purpose"] = 1
        apply_ambiguity_assumptions(fresh_state, "안녕", "collect_intent")

        trip = fresh_state.trip
        assert trip.purpose_tags == ["relax", "sightseeing"]
        assert trip.budget_style == "balanced"
        assert trip.pace == "balanced"
        assert fresh_state.dialog.offer_diverse_options is True
        assert len(fresh_state.dialog.assumptions) == 3
        assert fresh_state.dialog.reasoning_log[-1].startswith("[가정] ")

    def test_defaults_follow_the_text(self, fresh_state):
        fresh_state.dialog.question_attempts["q_trip_purpose"] = 2
        apply_ambiguity_assumptions(fresh_state, "쉬고 싶은데 빨리, 400만원", "collect_intent")

        trip = fresh_state.trip
        assert trip.purpose_tags == ["relax"]
        assert trip.budget_style == "premium"
        assert trip.pace == "tight"


class TestRegionAssumptions:
    """Tests for the collect_region branch."""

    def test_undecided_text_picks_fallback(self, fresh_state):
        fresh_state.trip.purpose_tags = ["relax"]
        fresh_state.trip.budget_style = "budget"
        apply_ambiguity_assumptions(fresh_state, "여행지는 모르겠어", "collect_region")

        region = fresh_state.trip.region
        assert (region.city, region.country, region.free_text) == ("Fukuoka", "Japan", "Fukuoka, Japan")
        assert "Fukuoka" in fresh_state.dialog.assumptions[-1]

    def test_no_signal_first_ask(self, fresh_state):
        fresh_state.trip.purpose_tags = ["food"]
        apply_ambiguity_assumptions(fresh_state, "글쎄", "collect_region")
        assert fresh_state.trip.region.free_text == ""

    def test_second_ask_defaults_to_tokyo(self, fresh_state):
        fresh_state.trip.purpose_tags = ["food"]
        fresh_state.dialog.question_attempts["q_destination_region"] = 1
        apply_ambiguity_assumptions(fresh_state, "글쎄", "collect_region")
        assert fresh_state.trip.region.city == "Tokyo"

    @pytest.mark.parametrize("budget,tags,city", [
        ("budget", ["relax"], "Fukuoka"),
        ("budget", ["food"], "Osaka"),
        ("premium", ["relax"], "Jeju"),
        (None, ["sightseeing"], "Tokyo"),
    ])
    def test_fallback_rules(self, fresh_state, budget, tags, city):
        fresh_state.trip.budget_style = budget
        fresh_state.trip.purpose_tags = tags
        assert choose_fallback_region(fresh_state).city == city


class TestDateAssumptions:
    """Tests for the collect_dates branch."""

    def test_duration_synthesizes_dates(self, fresh_state, today):
        apply_ambiguity_assumptions(fresh_state, "5일 정도 다녀올래", "collect_dates", today)
        dates = fresh_state.trip.dates
        assert (dates.start, dates.end, dates.flexible_days) == ("2026-03-02", "2026-03-06", 1)
        assert "5일 일정" in fresh_state.dialog.assumptions[-1]

    def test_second_ask_uses_default_length(self, fresh_state, today):
        fresh_state.dialog.question_attempts["q_date_range"] = 1
        apply_ambiguity_assumptions(fresh_state, "글쎄", "collect_dates", today)
        assert fresh_state.trip.dates.end == "2026-03-05"

    def test_no_signal_first_ask(self, fresh_state, today):
        apply_ambiguity_assumptions(fresh_state, "글쎄", "collect_dates", today)
        assert fresh_state.trip.dates.start == ""


class TestOriginAssumptions:
    """Tests for the collect_weights branch."""

    def test_second_ask_marks_origin_undecided(self, fresh_state):
        fresh_state.dialog.question_attempts["q_origin"] = 1
        apply_ambiguity_assumptions(fresh_state, "글쎄", "collect_weights")
        assert fresh_state.trip.origin.free_text == "미정"

    def test_first_ask_leaves_origin(self, fresh_state):
        apply_ambiguity_assumptions(fresh_state, "글쎄", "collect_weights")
        assert fresh_state.trip.origin.free_text == ""


class TestStayAreaSuggestion:
    """Tests for choose_suggested_stay_area."""

    def test_explicit_area_wins(self, fresh_state):
        fresh_state.trip.stay.area = "신주쿠"
        fresh_state.trip.purpose_tags = ["relax"]
        assert choose_suggested_stay_area(fresh_state) == "신주쿠"

    @pytest.mark.parametrize("tags,route,expected", [
        (["relax"], 0.25, "해변 근처"),
        (["food"], 0.25, "핫플 상권 근처"),
        (["sightseeing"], 0.3, "역세권"),
        (["sightseeing"], 0.25, "시내 중심"),
    ])
    def test_rules(self, fresh_state, tags, route, expected):
        fresh_state.trip.purpose_tags = tags
        fresh_state.weights.route = route
        assert choose_suggested_stay_area(fresh_state) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
