"""
Heuristic field extractors.

Each rule reads the raw text of one user turn and conditionally writes
fields of the planner state. Rules run unconditionally every turn, in a
fixed order, because later rules depend on earlier ones (for example the
amount-based budget fallback only fires when no budget keyword was seen).
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from travel_planner.planner.dialog import push_reasoning
from travel_planner.planner.gazetteer import (
    AIRPORT_GAZETTEER,
    CITY_GAZETTEER,
    ORIGIN_UNDECIDED_PATTERN,
    ROUTE_NO_TOKENS,
    ROUTE_YES_TOKENS,
    STAY_AREA_RULES,
    STAY_FIRST_TOKENS,
    STAY_UNDECIDED_TOKENS,
    UNKNOWN_DESTINATION_TOKENS,
    URGENT_DEPARTURE_TOKENS,
    WITHIN_A_WEEK_TOKEN,
    contains_any,
)
from travel_planner.planner.schemas import BudgetStyle, PlannerState
from travel_planner.planner.weights import (
    apply_preference_signals,
    infer_preference_signals,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Patterns
# =============================================================================

DATE_TOKEN = r"\d{4}[./-]\d{1,2}[./-]\d{1,2}|\d{1,2}[./-]\d{1,2}"
DATE_RANGE_RE = re.compile(
    rf"(?<![\d./-])({DATE_TOKEN}).{{0,12}}?(?:~|to|부터|까지|-|—|–).{{0,12}}?"
    rf"(?<![\d./])(?<!\d{{4}}[./-])({DATE_TOKEN})",
    re.IGNORECASE,
)
FULL_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
SHORT_DATE_RE = re.compile(r"^(\d{1,2})-(\d{1,2})$")

FLEXIBLE_DAYS_RES = (
    re.compile(r"(?:유동|여유|flex)(?:\D{0,6})(\d{1,2})\s*일", re.IGNORECASE),
    re.compile(r"\+-\s*(\d{1,2})\s*일"),
    re.compile(r"±\s*(\d{1,2})\s*일"),
)

NIGHTS_DAYS_RE = re.compile(r"(\d+)\s*박\s*(\d+)\s*일")
DAYS_RE = re.compile(r"(\d+)\s*일\s*(?:정도|쯤|로|가고|예정)?")
AMOUNT_MANWON_RE = re.compile(r"(\d+(?:\.\d+)?)\s*만\s*원")

ADULTS_RE = re.compile(r"(?:성인|어른)\s*(\d{1,2})")
CHILDREN_RE = re.compile(r"(?:아이|아동|유아|어린이)\s*(\d{1,2})")
PEOPLE_RE = re.compile(r"(\d{1,2})\s*명")

REGION_LABEL_RE = re.compile(r"(?:여행지|목적지|destination)\s*[:：]?\s*([^\n.,]+)", re.IGNORECASE)
STAY_LABEL_RE = re.compile(r"(?:숙소|호텔)\s*(?:위치|지역)?\s*(?:는|은|:)?\s*([^\n.,]+)", re.IGNORECASE)
ROUTE_INTENT_RE = re.compile(r"(여행\s*경로|동선|루트|itinerary)", re.IGNORECASE)

TRANSFERS_RE = re.compile(r"(\d)\s*회\s*경유")
WALK_KM_RE = re.compile(r"(\d+(?:\.\d+)?)\s*km", re.IGNORECASE)
MUST_VISIT_RE = re.compile(
    r"(?:필수\s*방문지|꼭\s*가고\s*싶은\s*곳|must\s*visit)\s*[:：]?\s*([^\n]+)",
    re.IGNORECASE,
)
MUST_VISIT_SPLIT_RE = re.compile(r"[,/|]")

MIN_TRIP_DAYS = 2
MAX_TRIP_DAYS = 14
DEFAULT_TRIP_DAYS = 4
MUST_VISIT_LIMIT = 5


@dataclass
class RegionMatch:
    matched: bool = False
    undecided: bool = False


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


# =============================================================================
# Pure parsers
# =============================================================================


def normalize_date_token(token: str, today: Optional[date] = None) -> Optional[str]:
    """
    Normalize a date-like token to YYYY-MM-DD.

    Accepts YYYY-MM-DD, YYYY.MM.DD and YYYY/MM/DD; MM-DD style tokens are
    placed in the current year. Returns None for calendar-impossible dates.
    """
    normalized = re.sub(r"[./]", "-", token.strip())

    full = FULL_DATE_RE.match(normalized)
    short = SHORT_DATE_RE.match(normalized)
    if full:
        year, month, day = (int(part) for part in full.groups())
    elif short:
        year = (today or utc_today()).year
        month, day = (int(part) for part in short.groups())
    else:
        return None

    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def parse_date_range(text: str, today: Optional[date] = None) -> Optional[Tuple[str, str]]:
    """
    Find a start/end date pair in free text.

    A year-less range whose end falls before its start rolls the end into
    the next year (12/28~1/3). Any other end-before-start range is rejected.
    """
    match = DATE_RANGE_RE.search(text)
    if not match:
        return None

    start = normalize_date_token(match.group(1), today)
    end = normalize_date_token(match.group(2), today)
    if not start or not end:
        return None

    year_less = not any(FULL_DATE_RE.match(re.sub(r"[./]", "-", token)) for token in match.groups())
    if end < start and year_less:
        try:
            end = date.fromisoformat(end).replace(year=int(start[:4]) + 1).isoformat()
        except ValueError:
            return None
    if end < start:
        return None
    return start, end


def parse_flexible_days(text: str) -> Optional[int]:
    for pattern in FLEXIBLE_DAYS_RES:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def parse_trip_duration_days(text: str) -> Optional[int]:
    """
    Parse a trip length in days ("3박 4일" -> 4, "5일 정도" -> 5).

    Values outside 2..14 are ignored.
    """
    nights_days = NIGHTS_DAYS_RE.search(text)
    if nights_days:
        days = int(nights_days.group(2))
        if MIN_TRIP_DAYS <= days <= MAX_TRIP_DAYS:
            return days

    only_days = DAYS_RE.search(text)
    if only_days:
        days = int(only_days.group(1))
        if MIN_TRIP_DAYS <= days <= MAX_TRIP_DAYS:
            return days

    return None


def parse_budget_style_from_amount(text: str) -> Optional[BudgetStyle]:
    """Map an amount in 만원 units to a budget style (<=150, <=300, above)."""
    match = AMOUNT_MANWON_RE.search(text)
    if not match:
        return None

    amount = float(match.group(1))
    if amount <= 150:
        return "budget"
    if amount <= 300:
        return "balanced"
    return "premium"


def is_urgent(text: str) -> bool:
    return contains_any(text.lower(), URGENT_DEPARTURE_TOKENS)


def synthesize_dates(
    state: PlannerState,
    text: str,
    days: int,
    today: Optional[date] = None,
) -> None:
    """
    Set a tentative range starting tomorrow and lasting `days` days.

    flexible_days becomes 3 for the "within a week" wording, else 1, but
    only when it was still 0.
    """
    start = (today or utc_today()) + timedelta(days=1)
    end = start + timedelta(days=max(1, days - 1))

    dates = state.trip.dates
    dates.start = start.isoformat()
    dates.end = end.isoformat()
    if dates.flexible_days == 0:
        dates.flexible_days = 3 if WITHIN_A_WEEK_TOKEN in text.lower() else 1


# =============================================================================
# State extractors
# =============================================================================


def parse_travelers(text: str, state: PlannerState) -> None:
    travelers = state.trip.travelers
    adults = ADULTS_RE.search(text)
    children = CHILDREN_RE.search(text)
    people = PEOPLE_RE.search(text)

    if adults:
        travelers.adults = max(1, int(adults.group(1)))
    elif people and not children:
        travelers.adults = max(1, int(people.group(1)))

    if children:
        travelers.children = int(children.group(1))

    if "가족" in text:
        travelers.notes = "family"

    if "커플" in text or "연인" in text:
        travelers.notes = "couple"

    if "혼자" in text or "솔로" in text:
        travelers.adults = 1
        travelers.notes = "solo"


def parse_region(text: str, state: PlannerState) -> RegionMatch:
    """
    Resolve the destination with first-match-wins precedence.

    1. Unknown-destination tokens clear the region (undecided).
    2. City gazetteer alias (substring of the lowercased text).
    3. Labelled free text ("목적지: ..."), unless it is itself an unknown token.
    """
    region = state.trip.region
    lower = text.lower()

    if contains_any(lower, UNKNOWN_DESTINATION_TOKENS):
        region.clear()
        return RegionMatch(undecided=True)

    for entry in CITY_GAZETTEER:
        if contains_any(lower, entry.aliases):
            region.city = entry.city
            region.country = entry.country
            region.free_text = entry.label
            return RegionMatch(matched=True)

    labelled = REGION_LABEL_RE.search(text)
    if labelled:
        candidate = labelled.group(1).strip()
        if candidate and not contains_any(candidate.lower(), UNKNOWN_DESTINATION_TOKENS):
            region.free_text = candidate
            return RegionMatch(matched=True)

    return RegionMatch()


def parse_origin(text: str, state: PlannerState) -> None:
    origin = state.trip.origin
    lower = text.lower()

    if re.search(ORIGIN_UNDECIDED_PATTERN, lower):
        origin.free_text = "미정"
        return

    for entry in AIRPORT_GAZETTEER:
        if contains_any(lower, entry.aliases):
            origin.airport_code = entry.code
            origin.city = entry.city
            origin.free_text = entry.label
            return


def parse_comfort_choices(text: str, state: PlannerState) -> None:
    """Star rating, villa and cabin keywords; budget/premium fill unset defaults."""
    trip = state.trip
    lower = text.lower()

    if "3성" in lower:
        trip.stay_level = "3_star"
    if "4성" in lower:
        trip.stay_level = "4_star"
    if "5성" in lower:
        trip.stay_level = "5_star"
    if "풀빌라" in lower:
        trip.stay_level = "pool_villa"

    if "이코노미" in lower:
        trip.seat_class = "economy"
    if "비즈" in lower:
        trip.seat_class = "business"
    if "퍼스트" in lower:
        trip.seat_class = "first"

    if "budget" in lower:
        trip.budget_style = "budget"
        if trip.seat_class is None:
            trip.seat_class = "economy"

    if "premium" in lower:
        trip.budget_style = "premium"
        if trip.stay_level is None:
            trip.stay_level = "5_star"
        if trip.seat_class is None:
            trip.seat_class = "business"

    if "balanced" in lower or "균형" in lower:
        trip.budget_style = "balanced"


def parse_stay_location_preference(text: str, state: PlannerState) -> None:
    stay = state.trip.stay
    lower = text.lower()

    if contains_any(lower, STAY_UNDECIDED_TOKENS):
        stay.decided = False
        stay.area = ""
        stay.notes = "undecided"
        return

    for tokens, area in STAY_AREA_RULES:
        if contains_any(lower, tokens):
            stay.decided = True
            stay.area = area
            return

    # "숙소 먼저" answers the route offer, not the stay location
    if contains_any(lower, STAY_FIRST_TOKENS):
        return

    labelled = STAY_LABEL_RE.search(text)
    if labelled and labelled.group(1).strip():
        stay.decided = True
        stay.area = labelled.group(1).strip()


def parse_route_preference(text: str, state: PlannerState) -> None:
    dialog = state.dialog
    lower = text.lower()

    if contains_any(lower, ROUTE_NO_TOKENS):
        dialog.route_accepted = "no"
        return

    if contains_any(lower, STAY_FIRST_TOKENS):
        dialog.route_accepted = "yes"
        return

    if contains_any(lower, ROUTE_YES_TOKENS) or ROUTE_INTENT_RE.search(text):
        dialog.route_accepted = "yes"


def parse_constraints(
    text: str,
    state: PlannerState,
    must_visit_limit: int = MUST_VISIT_LIMIT,
) -> None:
    constraints = state.trip.constraints
    lower = text.lower()

    if "직항" in lower:
        constraints.max_transfers = 0

    transfers = TRANSFERS_RE.search(text)
    if transfers:
        constraints.max_transfers = int(transfers.group(1))

    if "야간" in lower or "red eye" in lower or "redeye" in lower:
        constraints.avoid_red_eye = True

    walk = WALK_KM_RE.search(text)
    if walk:
        km = float(walk.group(1))
        if km > 0:
            constraints.max_daily_walk_km = km

    must_visit = MUST_VISIT_RE.search(text)
    if must_visit:
        places = []
        for token in MUST_VISIT_SPLIT_RE.split(must_visit.group(1)):
            place = token.strip()
            if place and place not in places:
                places.append(place)
        places = places[:must_visit_limit]

        if places and "none" not in places:
            constraints.must_visit = places


def apply_urgent_date_heuristic(
    state: PlannerState,
    text: str,
    today: Optional[date] = None,
) -> bool:
    """
    Synthesize tentative dates from urgency wording.

    Only fires when the text is urgent (or says "일주일") and dates are still
    empty.

    Returns:
        True if dates were set
    """
    lower = text.lower()
    if not is_urgent(text) and WITHIN_A_WEEK_TOKEN not in lower:
        return False

    if state.trip.dates.start and state.trip.dates.end:
        return False

    days = parse_trip_duration_days(text) or DEFAULT_TRIP_DAYS
    synthesize_dates(state, text, days, today)
    return True


def apply_text_update(
    state: PlannerState,
    user_text: str,
    today: Optional[date] = None,
) -> PlannerState:
    """
    Run every field extractor against one user turn.

    Mutates and returns `state`. Blank text is a no-op.

    Args:
        state: Planner state to mutate (already a private copy)
        user_text: Raw user turn
        today: Reference date for relative dates (defaults to UTC today)

    Returns:
        The same state instance
    """
    text = user_text.strip()
    if not text:
        return state

    purpose_count_before = len(state.trip.purpose_tags)
    region_before = state.trip.region.free_text

    parse_travelers(text, state)
    region_match = parse_region(text, state)
    parse_origin(text, state)
    parse_comfort_choices(text, state)
    parse_stay_location_preference(text, state)
    parse_route_preference(text, state)
    parse_constraints(text, state)

    date_range = parse_date_range(text, today)
    if date_range:
        state.trip.dates.start, state.trip.dates.end = date_range
        push_reasoning(state, f"사용자 입력에서 날짜 범위({date_range[0]}~{date_range[1]})를 추출함")

    flexible_days = parse_flexible_days(text)
    if flexible_days is not None:
        state.trip.dates.flexible_days = max(0, flexible_days)
        push_reasoning(state, f"날짜 유동성 ±{state.trip.dates.flexible_days}일로 반영함")

    if apply_urgent_date_heuristic(state, text, today):
        dates = state.trip.dates
        push_reasoning(state, f"급출발 표현을 기반으로 {dates.start}~{dates.end} 임시 일정으로 설정함")

    signals = infer_preference_signals(text)
    apply_preference_signals(state, signals)

    if state.trip.budget_style is None:
        from_amount = parse_budget_style_from_amount(text)
        if from_amount:
            state.trip.budget_style = from_amount
            push_reasoning(state, f"예산 언급(만원 단위) 기반으로 '{from_amount}' 성향을 반영함")

    if signals.budget_style:
        push_reasoning(state, f"예산 성향을 '{signals.budget_style}'로 업데이트함")

    if signals.purpose_tags:
        push_reasoning(state, f"여행 목적 태그({', '.join(signals.purpose_tags)})를 인식함")

    if region_match.undecided:
        push_reasoning(state, "목적지가 아직 미정이라는 답변을 감지함")
    elif state.trip.region.free_text and region_before != state.trip.region.free_text:
        push_reasoning(state, f"목적지를 '{state.trip.region.free_text}'로 인식함")

    if purpose_count_before == 0 and state.trip.purpose_tags:
        push_reasoning(state, "여행 목적 정보가 채워져 intent 질문을 축소할 수 있음")

    logger.debug(
        f"Text update applied | purpose_tags={state.trip.purpose_tags}, "
        f"region={state.trip.region.free_text!r}, dates={state.trip.dates.start}~{state.trip.dates.end}"
    )
    return state
