"""Common base models."""

from travel_planner.shared.schemas.base import CamelModel

__all__ = ["CamelModel"]
