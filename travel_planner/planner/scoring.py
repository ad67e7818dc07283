"""
Weighted multi-criteria scoring for flight and stay candidates.

Each candidate gets five metrics in [0, 1] (price, review, route, location,
comfort). The final score is the weighted mean of those metrics, divided by
the weight sum so the weights act as relative importance. Candidates are
returned as scored copies, sorted best first.
"""

from dataclasses import dataclass
from typing import List, Sequence

from travel_planner.planner.schemas import WEIGHT_KEYS, FlightResult, StayResult, Weights


FLIGHT_TOP_BADGE = "best_value"
STAY_TOP_BADGE = "best_match"

# Placeholders until providers return review/location data for flights
FLIGHT_REVIEW_METRIC = 0.6
FLIGHT_LOCATION_METRIC = 0.5
STAY_ROUTE_METRIC = 0.75

MISSING_DURATION_MINUTES = 999
PREMIUM_MARKERS = ("프리미엄", "premium")


@dataclass
class CandidateMetrics:
    price: float
    review: float
    route: float
    location: float
    comfort: float


def normalize(value: float, low: float, high: float) -> float:
    if high == low:
        return 1.0
    return (value - low) / (high - low)


def normalize_inverse(value: float, low: float, high: float) -> float:
    """Min-max normalization where the lowest value scores 1.0."""
    if high == low:
        return 1.0
    return (high - value) / (high - low)


def transfer_metric(transfers) -> float:
    if transfers == 0:
        return 1.0
    if transfers == 1:
        return 0.7
    return 0.4


def weighted_score(weights: Weights, metrics: CandidateMetrics) -> float:
    """
    Weighted mean of the metrics, clamped to [0, 1] and rounded to 2 places.

    Args:
        weights: The five criteria weights (need not sum to 1)
        metrics: Per-candidate metric values

    Returns:
        Final candidate score
    """
    weight_sum = weights.total()
    divisor = weight_sum if weight_sum > 0 else 1.0
    total = sum(getattr(weights, key) * getattr(metrics, key) for key in WEIGHT_KEYS)
    return round(max(0.0, min(1.0, total / divisor)), 2)


def dedupe(badges: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(badges))


def score_flights(weights: Weights, flights: Sequence[FlightResult]) -> List[FlightResult]:
    """
    Score and rank flight candidates.

    Price is inverse min-max normalized. Route averages the inverse
    duration metric with a transfer step (0 -> 1.0, 1 -> 0.7, 2+ -> 0.4).
    Comfort is 0.95 for premium summaries else 0.7, plus 0.05 when direct.
    The top flight gets the "best_value" badge.
    """
    if not flights:
        return []

    prices = [flight.price.amount for flight in flights]
    durations = [
        flight.duration_minutes if flight.duration_minutes is not None else MISSING_DURATION_MINUTES
        for flight in flights
    ]
    min_price, max_price = min(prices), max(prices)
    min_duration, max_duration = min(durations), max(durations)

    scored = []
    for flight in flights:
        duration = flight.duration_minutes if flight.duration_minutes is not None else max_duration
        duration_metric = normalize_inverse(duration, min_duration, max_duration)
        route_metric = round((duration_metric + transfer_metric(flight.transfers)) / 2, 2)

        summary = flight.summary.lower()
        comfort = 0.95 if any(marker in summary for marker in PREMIUM_MARKERS) else 0.7
        if flight.transfers == 0:
            comfort += 0.05

        metrics = CandidateMetrics(
            price=normalize_inverse(flight.price.amount, min_price, max_price),
            review=FLIGHT_REVIEW_METRIC,
            route=route_metric,
            location=FLIGHT_LOCATION_METRIC,
            comfort=min(1.0, comfort),
        )
        scored.append(
            flight.model_copy(
                deep=True,
                update={"score": weighted_score(weights, metrics), "badges": dedupe(flight.badges)},
            )
        )

    # sorted() is stable: ties keep provider order
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    ranked[0].badges = dedupe([FLIGHT_TOP_BADGE, *ranked[0].badges])
    return ranked


def score_stays(weights: Weights, stays: Sequence[StayResult]) -> List[StayResult]:
    """
    Score and rank stay candidates.

    Review is the min-max normalized rating, location 0.95 for "center"
    areas else 0.75, comfort rating/5 plus 0.05 when not the cheapest.
    The top stay gets the "best_match" badge.
    """
    if not stays:
        return []

    prices = [stay.price_per_night.amount for stay in stays]
    ratings = [stay.rating for stay in stays]
    min_price, max_price = min(prices), max(prices)
    min_rating, max_rating = min(ratings), max(ratings)

    scored = []
    for stay in stays:
        price = stay.price_per_night.amount
        comfort = stay.rating / 5 + (0.05 if price > min_price else 0.0)

        metrics = CandidateMetrics(
            price=normalize_inverse(price, min_price, max_price),
            review=normalize(stay.rating, min_rating, max_rating),
            route=STAY_ROUTE_METRIC,
            location=0.95 if "center" in stay.location.area.lower() else 0.75,
            comfort=min(1.0, comfort),
        )
        scored.append(
            stay.model_copy(
                deep=True,
                update={"score": weighted_score(weights, metrics), "badges": dedupe(stay.badges)},
            )
        )

    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    ranked[0].badges = dedupe([STAY_TOP_BADGE, *ranked[0].badges])
    return ranked
