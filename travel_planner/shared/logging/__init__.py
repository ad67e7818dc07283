"""Logging configuration and utilities."""

from travel_planner.shared.logging.config import setup_logging, log_state_transition, StructuredFormatter
from travel_planner.shared.logging.session_log import (
    SessionHistoryLog,
    get_or_create_history,
    remove_history,
)

__all__ = [
    "setup_logging",
    "log_state_transition",
    "StructuredFormatter",
    "SessionHistoryLog",
    "get_or_create_history",
    "remove_history",
]
