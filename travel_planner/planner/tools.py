"""
Travel tool provider interface and the guarded call wrapper.

The planner only depends on the `TravelToolProvider` protocol; any object
with the three async methods can be injected. Every call goes through
`call_tool`, which bounds it with a timeout and retries transient failures
with tenacity.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Optional, Protocol, TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from travel_planner.planner.errors import ToolProviderError
from travel_planner.planner.graph.config import DEFAULT_CONFIG, PlannerConfig
from travel_planner.planner.schemas import FlightResult, RouteDraftDay, StayResult
from travel_planner.shared.schemas.base import CamelModel


logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Tool inputs
# =============================================================================


class FlightSearchInput(CamelModel):
    origin: str
    destination: str
    start_date: str
    end_date: str
    adults: int
    children: int
    seat_class: str = "economy"
    max_transfers: Optional[int] = None


class StaySearchInput(CamelModel):
    destination: str
    start_date: str
    end_date: str
    adults: int
    children: int
    stay_level: Optional[str] = None


class RouteDraftInput(CamelModel):
    destination: str
    purpose_tags: List[str]
    must_visit: List[str]
    max_daily_walk_km: Optional[float] = None
    days: int
    stay_area: Optional[str] = None


class TravelToolProvider(Protocol):
    """Search capability consumed by the planner. Candidates come back unscored."""

    async def search_flights(self, query: FlightSearchInput) -> List[FlightResult]:
        ...

    async def search_stays(self, query: StaySearchInput) -> List[StayResult]:
        ...

    async def draft_route(self, query: RouteDraftInput) -> List[RouteDraftDay]:
        ...


# =============================================================================
# Guarded call
# =============================================================================


async def call_tool(
    name: str,
    call: Callable[[], Awaitable[T]],
    config: Optional[PlannerConfig] = None,
    session_id: str = "unknown",
) -> T:
    """
    Await a tool call with a timeout and retries.

    Args:
        name: Tool name for logs and errors (e.g. "search_flights")
        call: Zero-argument factory returning a fresh awaitable per attempt
        config: Timeout/retry settings. Uses DEFAULT_CONFIG if not provided.
        session_id: Session id for log context

    Returns:
        The tool result

    Raises:
        ToolProviderError: If every attempt failed or timed out
    """
    if config is None:
        config = DEFAULT_CONFIG

    _log = f"[session={session_id}] [graph=planner] [tool={name}] "
    retrying = AsyncRetrying(
        stop=stop_after_attempt(config.tool_max_retries + 1),
        wait=wait_exponential(multiplier=1, min=config.retry_min_wait, max=config.retry_max_wait),
        retry=retry_if_exception_type((asyncio.TimeoutError, ConnectionError, OSError)),
        reraise=True,
    )

    start_time = time.perf_counter()
    try:
        async for attempt in retrying:
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                if attempt_number > 1:
                    logger.warning(f"{_log}Retrying | attempt={attempt_number}")
                result = await asyncio.wait_for(call(), timeout=config.tool_timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"{_log}Timed out after {config.tool_timeout}s")
        raise ToolProviderError(name, f"timed out after {config.tool_timeout}s") from e
    except ToolProviderError:
        raise
    except Exception as e:
        logger.exception(f"{_log}Tool call failed: {e}")
        raise ToolProviderError(name, str(e)) from e

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"{_log}Tool responded | duration={duration_ms:.0f}ms")
    return result
