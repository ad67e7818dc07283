"""
Mock travel tool provider.

Returns canned but query-aware flights, stays and route drafts so the
planner can run end to end without a booking API. Prices are derived from
a deterministic hash of the query, so the same query always yields the
same candidates.
"""

import logging
from typing import List
from urllib.parse import quote

from travel_planner.planner.schemas import (
    FlightResult,
    Price,
    RouteDraftDay,
    RouteItem,
    StayLocation,
    StayResult,
)
from travel_planner.planner.tools import FlightSearchInput, RouteDraftInput, StaySearchInput


logger = logging.getLogger(__name__)


MAX_ROUTE_DAYS = 3
CURRENCY = "KRW"


def hash_seed(value: str) -> int:
    seed = 0
    for char in value:
        seed = (seed * 31 + ord(char)) % 100000
    return seed


def _encode(value: str) -> str:
    return quote(value, safe="")


def _flight_search_url(query: FlightSearchInput, transfers: int) -> str:
    origin = query.origin.strip() or "Anywhere"
    destination = query.destination.strip() or "Destination"
    if query.start_date and query.end_date:
        date_label = f"{query.start_date} to {query.end_date}"
    else:
        date_label = query.start_date or "anytime"
    cabin = query.seat_class or "economy"
    transfer_label = "direct" if transfers == 0 else f"{transfers} stop"
    text = (
        f"Flights from {origin} to {destination} on {date_label} for "
        f"{query.adults} adults {query.children} children {cabin} {transfer_label}"
    )
    return f"https://www.google.com/travel/flights?q={_encode(text)}"


def _booking_url(query: StaySearchInput, area: str) -> str:
    destination = _encode(f"{query.destination} {area}".strip())
    return (
        f"https://www.booking.com/searchresults.html?ss={destination}"
        f"&checkin={query.start_date}&checkout={query.end_date}"
        f"&group_adults={query.adults}&group_children={query.children}"
    )


def _maps_url(text: str) -> str:
    return f"https://www.google.com/maps/search/?api=1&query={_encode(text)}"


class MockTravelToolProvider:
    """Deterministic in-process implementation of TravelToolProvider."""

    async def search_flights(self, query: FlightSearchInput) -> List[FlightResult]:
        seed = hash_seed(f"{query.origin}-{query.destination}-{query.start_date}-{query.end_date}")
        base_price = 240000 + seed % 120000
        origin = query.origin or "미정"

        flights = [
            FlightResult(
                id="f_1",
                summary=f"{origin} → {query.destination}, 직항, 2h 20m",
                price=Price(amount=base_price, currency=CURRENCY),
                provider="Skyscanner",
                score=0,
                url=_flight_search_url(query, 0),
                badges=["direct"],
                transfers=0,
                duration_minutes=140,
            ),
            FlightResult(
                id="f_2",
                summary=f"{origin} → {query.destination}, 1회 경유, 5h 40m",
                price=Price(amount=max(90000, base_price - 70000), currency=CURRENCY),
                provider="Skyscanner",
                score=0,
                url=_flight_search_url(query, 1),
                badges=["low_price"],
                transfers=1,
                duration_minutes=340,
            ),
            FlightResult(
                id="f_3",
                summary=f"{origin} → {query.destination}, 직항, 2h 10m (프리미엄 편의)",
                price=Price(amount=base_price + 110000, currency=CURRENCY),
                provider="Skyscanner",
                score=0,
                url=_flight_search_url(query, 0),
                badges=["comfort"],
                transfers=0,
                duration_minutes=130,
            ),
        ]

        if query.max_transfers is not None:
            flights = [flight for flight in flights if flight.transfers <= query.max_transfers]

        logger.debug(f"Mock flights | destination={query.destination}, count={len(flights)}")
        return flights

    async def search_stays(self, query: StaySearchInput) -> List[StayResult]:
        seed = hash_seed(f"{query.destination}-{query.start_date}-{query.end_date}")
        base_price = 130000 + seed % 90000

        central = StayResult(
            id="h_1",
            name=f"{query.destination} Central Hotel",
            rating=4.6,
            price_per_night=Price(amount=base_price + 30000, currency=CURRENCY),
            location=StayLocation(area="City Center", lat=35.0, lng=139.0),
            provider="Booking",
            score=0,
            url=_booking_url(query, "City Center"),
            badges=["great_location", "high_review"],
        )
        value = StayResult(
            id="h_2",
            name=f"{query.destination} Value Stay",
            rating=4.1,
            price_per_night=Price(amount=max(80000, base_price - 25000), currency=CURRENCY),
            location=StayLocation(area="Transit Hub", lat=35.1, lng=139.05),
            provider="Hotels.com",
            score=0,
            url=f"https://www.hotels.com/Hotel-Search?destination={_encode(query.destination)}",
            badges=["best_value"],
        )
        resort = StayResult(
            id="h_3",
            name=f"{query.destination} Signature Resort",
            rating=4.8,
            price_per_night=Price(amount=base_price + 140000, currency=CURRENCY),
            location=StayLocation(area="Scenic District", lat=35.2, lng=139.1),
            provider="Agoda",
            score=0,
            url=f"https://www.agoda.com/search?city={_encode(query.destination)}",
            badges=["premium", "high_review"],
        )

        if query.stay_level == "3_star":
            return [central, value]
        if query.stay_level in ("5_star", "pool_villa"):
            return [resort, central]
        return [central, value, resort]

    async def draft_route(self, query: RouteDraftInput) -> List[RouteDraftDay]:
        days = max(1, min(query.days, MAX_ROUTE_DAYS))
        must_visit = query.must_visit or ["메인 스팟"]
        stay_area = (query.stay_area or "").strip() or "접근성 좋은 중심지"
        wants_food = "food" in query.purpose_tags

        route = []
        for day in range(1, days + 1):
            spot = must_visit[(day - 1) % len(must_visit)]
            route.append(
                RouteDraftDay(
                    day=day,
                    title="도착 + 가벼운 이동" if day == 1 else f"{day}일차 추천 동선",
                    items=[
                        RouteItem(time="10:00", name=f"숙소 체크인 ({stay_area})", type="stay"),
                        RouteItem(
                            time="11:30",
                            name=spot,
                            type="place",
                            url=_maps_url(f"{query.destination} {stay_area} {spot}"),
                        ),
                        RouteItem(
                            time="15:00",
                            name="현지 인기 맛집" if wants_food else "핵심 관광지",
                            type="place",
                            url=_maps_url(
                                f"{query.destination} {stay_area} "
                                f"{'restaurant' if wants_food else 'attraction'}"
                            ),
                        ),
                    ],
                )
            )

        return route
