"""
Graph configuration for the planner agent.

Centralizes all tunables for the per-turn planner graph (question limits,
tool call timeouts and retries, state storage), making it easy to
tune behavior without modifying the graph wiring.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class PlannerConfig:
    """
    Configuration for the planner graph.

    Attributes:
        recursion_limit: Maximum number of graph steps per turn
        max_questions: Maximum questions returned in a collect stage
        max_recommend_questions: Maximum route-offer questions in recommend
        tool_timeout: Seconds allowed per tool provider call
        tool_max_retries: Retries after the first failed tool call
        state_dir: Directory (relative to a workspace) holding state files
        log_level: Logging level name for the API process
        log_format: "text" for the line format, "json" for JSON lines
    """

    # Graph execution limits
    recursion_limit: int = 25

    # Question rules
    max_questions: int = 3
    max_recommend_questions: int = 2

    # Tool provider calls (used by tenacity in planner/tools.py)
    tool_timeout: float = 20.0  # seconds
    tool_max_retries: int = 2
    retry_min_wait: float = 1.0  # seconds
    retry_max_wait: float = 4.0  # seconds

    # Persistence
    state_dir: str = ".travel-planner"

    # Logging (applied by main.py through shared.logging.setup_logging)
    log_level: str = "INFO"
    log_format: str = "text"


# Default configuration instance
DEFAULT_CONFIG = PlannerConfig()


def get_config(
    max_questions: Optional[int] = None,
    tool_timeout: Optional[float] = None,
    tool_max_retries: Optional[int] = None,
    state_dir: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> PlannerConfig:
    """
    Create a configuration with optional overrides.

    Args:
        max_questions: Override for questions per collect turn
        tool_timeout: Override for tool call timeout (seconds)
        tool_max_retries: Override for tool call retries
        state_dir: Override for the state directory
        log_level: Override for the log level name
        log_format: Override for the log format ("text" or "json")

    Returns:
        PlannerConfig with specified overrides applied
    """
    return PlannerConfig(
        max_questions=max_questions or DEFAULT_CONFIG.max_questions,
        tool_timeout=tool_timeout or DEFAULT_CONFIG.tool_timeout,
        tool_max_retries=tool_max_retries
        if tool_max_retries is not None
        else DEFAULT_CONFIG.tool_max_retries,
        state_dir=state_dir or DEFAULT_CONFIG.state_dir,
        log_level=log_level or DEFAULT_CONFIG.log_level,
        log_format=log_format or DEFAULT_CONFIG.log_format,
    )


def load_config_from_env() -> PlannerConfig:
    """
    Build a configuration from environment variables (and a .env file).

    Reads PLANNER_STATE_DIR, PLANNER_TOOL_TIMEOUT, PLANNER_TOOL_MAX_RETRIES
    PLANNER_LOG_LEVEL and PLANNER_LOG_FORMAT. Unset variables fall back to DEFAULT_CONFIG.
    """
    load_dotenv()

    timeout = os.environ.get("PLANNER_TOOL_TIMEOUT")
    retries = os.environ.get("PLANNER_TOOL_MAX_RETRIES")

    return get_config(
        tool_timeout=float(timeout) if timeout else None,
        tool_max_retries=int(retries) if retries else None,
        state_dir=os.environ.get("PLANNER_STATE_DIR"),
        log_level=os.environ.get("PLANNER_LOG_LEVEL"),
        log_format=os.environ.get("PLANNER_LOG_FORMAT"),
    )
