"""
Unit tests for the scoring engine.

Tests metric normalization, weighted scoring, ranking and the top badge
for flights and stays.
"""

import pytest

from travel_planner.planner.schemas import (
    FlightResult,
    Price,
    StayLocation,
    StayResult,
    Weights,
)
from travel_planner.planner.scoring import (
    CandidateMetrics,
    normalize,
    normalize_inverse,
    score_flights,
    score_stays,
    transfer_metric,
    weighted_score,
)


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_flight(flight_id, amount, transfers, duration, summary="ICN → Tokyo", badges=None):
    return FlightResult(
        id=flight_id,
        summary=summary,
        price=Price(amount=amount, currency="KRW"),
        provider="Skyscanner",
        score=0,
        url="https://www.google.com/travel/flights",
        badges=badges or [],
        transfers=transfers,
        duration_minutes=duration,
    )


def _make_stay(stay_id, rating, amount, area, badges=None):
    return StayResult(
        id=stay_id,
        name=f"Stay {stay_id}",
        rating=rating,
        price_per_night=Price(amount=amount, currency="KRW"),
        location=StayLocation(area=area, lat=35.0, lng=139.0),
        provider="Booking",
        score=0,
        url="https://www.booking.com/searchresults.html",
        badges=badges or [],
    )


def _make_flights():
    return [
        _make_flight("f_1", 300000, 0, 140, "ICN → Tokyo, 직항, 2h 20m", ["direct", "direct"]),
        _make_flight("f_2", 230000, 1, 340, "ICN → Tokyo, 1회 경유, 5h 40m", ["low_price"]),
        _make_flight("f_3", 410000, 0, 130, "ICN → Tokyo, 직항 (프리미엄 편의)", ["comfort"]),
    ]


def _make_stays():
    return [
        _make_stay("h_1", 4.6, 180000, "City Center", ["great_location"]),
        _make_stay("h_2", 4.1, 125000, "Transit Hub", ["best_value"]),
        _make_stay("h_3", 4.8, 290000, "Scenic District", ["premium"]),
    ]


class TestMetrics:
    """Tests for the metric helpers."""

    def test_normalize_degenerate_range(self):
        """A single value (low == high) scores 1.0."""
        assert normalize(5, 5, 5) == 1.0
        assert normalize_inverse(5, 5, 5) == 1.0

    def test_normalize_inverse(self):
        assert normalize_inverse(100, 100, 200) == 1.0
        assert normalize_inverse(200, 100, 200) == 0.0

    def test_transfer_metric(self):
        assert transfer_metric(0) == 1.0
        assert transfer_metric(1) == 0.7
        assert transfer_metric(2) == 0.4
        assert transfer_metric(None) == 0.4

    def test_weighted_score_is_relative(self):
        """Weights act as relative importance (divided by their sum)."""
        metrics = CandidateMetrics(price=1.0, review=0.0, route=0.0, location=0.0, comfort=0.0)
        weights = Weights(price=0.5, review=0.5, route=0.0, location=0.0, comfort=0.0)
        assert weighted_score(weights, metrics) == 0.5

    def test_weighted_score_zero_weights(self):
        metrics = CandidateMetrics(price=1.0, review=1.0, route=1.0, location=1.0, comfort=1.0)
        weights = Weights(price=0, review=0, route=0, location=0, comfort=0)
        assert weighted_score(weights, metrics) == 0.0


class TestScoreFlights:
    """Tests for score_flights."""

    def test_empty(self):
        assert score_flights(Weights(), []) == []

    def test_equal_weights_ranking(self):
        ranked = score_flights(Weights(), _make_flights())
        assert [flight.id for flight in ranked] == ["f_1", "f_2", "f_3"]
        assert [flight.score for flight in ranked] == [0.69, 0.63, 0.62]

    def test_top_badge_and_dedup(self):
        ranked = score_flights(Weights(), _make_flights())
        assert ranked[0].badges == ["best_value", "direct"]
        assert all("best_value" not in flight.badges for flight in ranked[1:])

    def test_price_heavy_weights_favor_cheapest(self):
        weights = Weights(price=0.95, review=0.05, route=0.05, location=0.05, comfort=0.05)
        ranked = score_flights(weights, _make_flights())
        assert ranked[0].id == "f_2"

    def test_scores_sorted_and_bounded(self):
        ranked = score_flights(Weights(route=0.9, comfort=0.8), _make_flights())
        scores = [flight.score for flight in ranked]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= score <= 1 for score in scores)

    def test_inputs_are_not_mutated(self):
        flights = _make_flights()
        score_flights(Weights(), flights)
        assert all(flight.score == 0 for flight in flights)
        assert flights[0].badges == ["direct", "direct"]

    def test_ties_keep_provider_order(self):
        flights = [
            _make_flight("a", 200000, 0, 120),
            _make_flight("b", 200000, 0, 120),
        ]
        ranked = score_flights(Weights(), flights)
        assert [flight.id for flight in ranked] == ["a", "b"]

    def test_missing_duration_is_worst(self):
        flights = [
            _make_flight("known", 200000, 0, 120),
            _make_flight("unknown", 200000, 0, None),
        ]
        ranked = score_flights(Weights(route=0.95), flights)
        assert ranked[0].id == "known"


class TestScoreStays:
    """Tests for score_stays."""

    def test_empty(self):
        assert score_stays(Weights(), []) == []

    def test_equal_weights_ranking(self):
        ranked = score_stays(Weights(), _make_stays())
        assert [stay.id for stay in ranked] == ["h_1", "h_3", "h_2"]
        assert [stay.score for stay in ranked] == [0.81, 0.7, 0.66]

    def test_top_badge(self):
        ranked = score_stays(Weights(), _make_stays())
        assert ranked[0].badges == ["best_match", "great_location"]
        assert sum("best_match" in stay.badges for stay in ranked) == 1

    def test_single_stay(self):
        ranked = score_stays(Weights(), [_make_stay("only", 4.0, 100000, "Old Town")])
        assert len(ranked) == 1
        assert ranked[0].badges == ["best_match"]
        assert 0 <= ranked[0].score <= 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
