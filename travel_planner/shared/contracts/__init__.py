"""Agent output contracts surfaced to callers."""

from travel_planner.shared.contracts.agent_response import AgentResponse, UICard

__all__ = ["AgentResponse", "UICard"]
