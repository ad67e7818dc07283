"""
Shared infrastructure for the planner agent.

Modules:
- logging: Structured JSON logging and per-session conversation history
- contracts: The agent_response contract surfaced to callers
- schemas: Common base models
"""

from travel_planner.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "setup_logging",
    "log_state_transition",
]
