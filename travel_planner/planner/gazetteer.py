"""
Static lookup tables for text understanding.

City/country and airport gazetteers, keyword token sets and the purpose
keyword table. Loaded once at import and never mutated.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Tuple


@dataclass(frozen=True)
class CityEntry:
    city: str
    country: str
    aliases: Tuple[str, ...]

    @property
    def label(self) -> str:
        return f"{self.city}, {self.country}"


@dataclass(frozen=True)
class AirportEntry:
    code: str
    city: str
    aliases: Tuple[str, ...]

    @property
    def label(self) -> str:
        return f"{self.city} ({self.code})"


# Order matters: first alias hit wins
CITY_GAZETTEER: Tuple[CityEntry, ...] = (
    CityEntry("Tokyo", "Japan", ("도쿄", "tokyo")),
    CityEntry("Osaka", "Japan", ("오사카", "osaka")),
    CityEntry("Fukuoka", "Japan", ("후쿠오카", "fukuoka")),
    CityEntry("Bangkok", "Thailand", ("방콕", "bangkok")),
    CityEntry("Singapore", "Singapore", ("싱가포르", "singapore")),
    CityEntry("Paris", "France", ("파리", "paris")),
    CityEntry("London", "United Kingdom", ("런던", "london")),
    CityEntry("New York", "United States", ("뉴욕", "new york")),
    CityEntry("Jeju", "South Korea", ("제주", "jeju")),
    CityEntry("Busan", "South Korea", ("부산", "busan")),
)

AIRPORT_GAZETTEER: Tuple[AirportEntry, ...] = (
    AirportEntry("ICN", "Seoul", ("인천", "icn")),
    AirportEntry("GMP", "Seoul", ("김포", "gmp")),
    AirportEntry("PUS", "Busan", ("김해", "pus", "부산")),
    AirportEntry("CJU", "Jeju", ("제주", "cju")),
    AirportEntry("NRT", "Tokyo", ("나리타", "nrt")),
    AirportEntry("HND", "Tokyo", ("하네다", "hnd")),
)


# =============================================================================
# Token sets
# =============================================================================

UNKNOWN_DESTINATION_TOKENS = ("모르겠", "미정", "아무데나", "상관없", "추천해줘")
# "undecided" must not match button values such as "stay_undecided"
ORIGIN_UNDECIDED_PATTERN = r"미정|(?<![a-z_])undecided"

URGENT_DEPARTURE_TOKENS = ("최대한 빨리", "빨리", "당장", "일주일 안", "이번 주", "곧")
WITHIN_A_WEEK_TOKEN = "일주일"

ROUTE_YES_TOKENS = ("동선", "여행 경로", "일정 추천", "루트", "경로 추천", "지금 추천해줘", "route_yes")
ROUTE_NO_TOKENS = ("나중에", "아니", "괜찮", "패스", "지금 말고", "route_later")
STAY_FIRST_TOKENS = ("숙소 먼저", "stay_first")

STAY_UNDECIDED_TOKENS = ("숙소 미정", "숙소는 미정", "미정", "아직 안 정함", "stay_undecided")

# (tokens, canned area label), checked in order
STAY_AREA_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("시내", "stay_center"), "시내 중심"),
    (("역세권", "교통", "stay_transit"), "역세권"),
    (("해변", "바다", "stay_scenic"), "해변 근처"),
)

RELAX_PATTERN = r"(휴식|쉬러|힐링|쉬고)"
HURRIED_PATTERN = r"(후딱|빨리|타이트)"


# =============================================================================
# Preference keywords
# =============================================================================

PURPOSE_KEYWORDS = MappingProxyType(
    {
        "relax": ("휴양", "힐링", "쉬고", "여유", "호캉스", "휴식", "쉬고싶", "쉬러", "쉬러가"),
        "sightseeing": ("관광", "명소", "투어", "구경"),
        "food": ("미식", "맛집", "먹방", "레스토랑", "카페"),
        "shopping": ("쇼핑", "아울렛", "백화점"),
        "business": ("출장", "비즈니스", "컨퍼런스", "회의"),
        "family": ("가족", "아이", "부모님", "유아"),
        "couple": ("커플", "신혼", "연인", "기념일"),
        "activity": ("액티비티", "하이킹", "스포츠", "체험"),
    }
)

BUDGET_TOKENS = ("최저가", "저렴", "가성비", "budget", "돈이 없", "돈없")
PREMIUM_TOKENS = ("프리미엄", "럭셔리", "고급", "premium")
BALANCED_TOKENS = ("균형", "밸런스", "balanced")

TIGHT_PACE_TOKENS = ("빡빡", "타이트", "tight", "후딱", "빨리")
RELAXED_PACE_TOKENS = ("여유", "천천히", "느긋", "relaxed")
BALANCED_PACE_TOKENS = ("보통", "balanced pace")

REVIEW_FOCUS_TOKENS = ("후기", "리뷰", "평점", "청결")
ROUTE_FOCUS_TOKENS = ("동선", "이동 최소", "직항", "경유 싫", "가깝")
LOCATION_FOCUS_TOKENS = ("위치", "중심", "역세권", "근처", "시내")
COMFORT_FOCUS_TOKENS = ("편한", "비즈니스석", "퍼스트", "5성", "풀빌라", "럭셔리")


def contains_any(text: str, tokens) -> bool:
    """True if any token is a substring of text."""
    return any(token in text for token in tokens)
