"""Graph configuration for the planner agent. The graph itself lives in build.py."""

from travel_planner.planner.graph.config import PlannerConfig, DEFAULT_CONFIG, get_config

__all__ = ["PlannerConfig", "DEFAULT_CONFIG", "get_config"]
