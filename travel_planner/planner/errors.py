"""Exceptions raised by the planner agent."""


class PlannerError(Exception):
    """Base class for planner failures surfaced to callers."""


class ToolProviderError(PlannerError):
    """A travel tool call failed or timed out after all retries. Fatal to the turn."""

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        super().__init__(f"{tool_name}: {message}")


class StateValidationError(PlannerError):
    """Planner state failed schema validation before being persisted."""
