"""
Schemas for the planner agent.

Defines the persisted planner state (trip, weights, rationale, dialog),
the question models shown to the user, and the candidate models returned
by the travel tool provider.
"""

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator

from travel_planner.shared.schemas.base import CamelModel


# =============================================================================
# Enumerations
# =============================================================================

Stage = Literal[
    "collect_intent",
    "collect_region",
    "collect_dates",
    "collect_weights",
    "search",
    "recommend",
]

BudgetStyle = Literal["budget", "balanced", "premium"]
StayLevel = Literal["3_star", "4_star", "5_star", "pool_villa"]
SeatClass = Literal["economy", "business", "first"]
Pace = Literal["tight", "balanced", "relaxed"]
RouteAccepted = Literal["unknown", "yes", "no"]
WeightKey = Literal["price", "review", "route", "location", "comfort"]

WEIGHT_KEYS = ("price", "review", "route", "location", "comfort")

# ISO date or empty (unset)
DATE_PATTERN = r"^$|^\d{4}-\d{2}-\d{2}$"

# Sentinel used for "origin known to be undecided" and unknown labels
UNDECIDED = "미정"


# =============================================================================
# Trip State
# =============================================================================


class Region(CamelModel):
    """Destination. Any non-empty field means the region is known."""

    country: str = ""
    city: str = ""
    free_text: str = ""

    def clear(self) -> None:
        self.country = ""
        self.city = ""
        self.free_text = ""


class TripDates(CamelModel):
    """Trip date range. start and end are set together."""

    start: str = Field(default="", pattern=DATE_PATTERN)
    end: str = Field(default="", pattern=DATE_PATTERN)
    flexible_days: int = Field(default=0, ge=0)

    @field_validator("start", "end")
    @classmethod
    def must_be_calendar_date(cls, value: str) -> str:
        if value:
            date.fromisoformat(value)
        return value


class Travelers(CamelModel):
    adults: int = Field(default=1, ge=1)
    children: int = Field(default=0, ge=0)
    notes: str = ""


class Origin(CamelModel):
    """Departure point. free_text == "미정" marks an explicitly undecided origin."""

    city: str = ""
    airport_code: str = ""
    free_text: str = ""


class Constraints(CamelModel):
    max_transfers: Optional[int] = Field(default=None, ge=0)
    avoid_red_eye: bool = False
    max_daily_walk_km: Optional[float] = Field(default=None, gt=0)
    must_visit: List[str] = Field(default_factory=list, max_length=5)


class StayPreference(CamelModel):
    """Where the user wants to sleep (geography), independent of stay_level (class)."""

    decided: bool = False
    area: str = ""
    notes: str = ""


class TripState(CamelModel):
    """Accumulated structured understanding of the trip."""

    region: Region = Field(default_factory=Region)
    dates: TripDates = Field(default_factory=TripDates)
    travelers: Travelers = Field(default_factory=Travelers)
    origin: Origin = Field(default_factory=Origin)
    purpose_tags: List[str] = Field(default_factory=list)
    budget_style: Optional[BudgetStyle] = None
    stay_level: Optional[StayLevel] = None
    seat_class: Optional[SeatClass] = None
    pace: Optional[Pace] = None
    constraints: Constraints = Field(default_factory=Constraints)
    stay: StayPreference = Field(default_factory=StayPreference)

    @field_validator("budget_style", "stay_level", "seat_class", "pace", mode="before")
    @classmethod
    def empty_string_is_unset(cls, value):
        # Older state files stored "" for unset categorical fields
        if value == "":
            return None
        return value


# =============================================================================
# Weights / Dialog
# =============================================================================


class Weights(CamelModel):
    """Relative importance of the five scoring criteria. Need not sum to 1."""

    price: float = Field(default=0.25, ge=0, le=1)
    review: float = Field(default=0.25, ge=0, le=1)
    route: float = Field(default=0.25, ge=0, le=1)
    location: float = Field(default=0.25, ge=0, le=1)
    comfort: float = Field(default=0.25, ge=0, le=1)

    def total(self) -> float:
        return sum(getattr(self, key) for key in WEIGHT_KEYS)


class WeightRationale(CamelModel):
    key: WeightKey
    reason: str = Field(min_length=1)


class DialogState(CamelModel):
    """Conversation bookkeeping plus the route-offer sub-state."""

    last_asked_question_ids: List[str] = Field(default_factory=list)
    question_attempts: Dict[str, int] = Field(default_factory=dict)
    reasoning_log: List[str] = Field(default_factory=list)
    assumptions: List[str] = Field(default_factory=list)
    route_proposal_asked: bool = False
    route_accepted: RouteAccepted = "unknown"
    stay_question_asked: bool = False
    offer_diverse_options: bool = False

    def attempts(self, question_id: str) -> int:
        return self.question_attempts.get(question_id, 0)


class PlannerState(CamelModel):
    """
    Full persisted unit for one conversation.

    Loaded at the start of a turn, deep-copied before mutation, and
    validated as a whole before it is saved.
    """

    trip: TripState = Field(default_factory=TripState)
    weights: Weights = Field(default_factory=Weights)
    weight_rationale: List[WeightRationale] = Field(default_factory=list)
    dialog: DialogState = Field(default_factory=DialogState)


def initial_state() -> PlannerState:
    """Return a fresh planner state with every field at its default."""
    return PlannerState()


# =============================================================================
# Questions
# =============================================================================


class QuestionOption(CamelModel):
    label: str = Field(min_length=1)
    value: str = Field(min_length=1)
    reason: Optional[str] = None


class Question(CamelModel):
    """A clarifying question with labeled options and a free-text escape hatch."""

    id: str = Field(min_length=1)
    text: str = Field(min_length=1)
    options: List[QuestionOption] = Field(min_length=1)
    allow_free_text: bool = True


# =============================================================================
# Candidates
# =============================================================================


class Price(CamelModel):
    amount: float = Field(ge=0)
    currency: str = Field(min_length=1)


class FlightResult(CamelModel):
    id: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    price: Price
    provider: str = Field(min_length=1)
    score: float = Field(ge=0, le=1)
    url: str = Field(min_length=1, pattern=r"^https?://")
    badges: List[str] = Field(default_factory=list)
    transfers: Optional[int] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, ge=1)


class StayLocation(CamelModel):
    area: str = Field(min_length=1)
    lat: float
    lng: float


class StayResult(CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    rating: float = Field(ge=0, le=5)
    price_per_night: Price
    location: StayLocation
    provider: str = Field(min_length=1)
    score: float = Field(ge=0, le=1)
    url: str = Field(min_length=1, pattern=r"^https?://")
    badges: List[str] = Field(default_factory=list)


class RouteItem(CamelModel):
    time: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: Literal["flight", "stay", "place", "move", "meal", "activity"]
    url: Optional[str] = Field(default=None, pattern=r"^https?://")


class RouteDraftDay(CamelModel):
    day: int = Field(ge=1)
    title: str = Field(min_length=1)
    items: List[RouteItem] = Field(default_factory=list)


class Results(CamelModel):
    flights: List[FlightResult] = Field(default_factory=list)
    stays: List[StayResult] = Field(default_factory=list)
    route_draft: List[RouteDraftDay] = Field(default_factory=list)
