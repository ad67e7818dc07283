"""
Planner agent for conversational trip planning.

Fills trip slots from free-form user turns, asks at most three
clarifying questions per turn, and searches, scores and recommends
flights, stays and a route draft once enough is known.
"""

from travel_planner.planner.schemas import PlannerState, initial_state
from travel_planner.planner.engine import PlannerEngineOutput, run_planner_engine

__all__ = ["PlannerState", "initial_state", "PlannerEngineOutput", "run_planner_engine"]
