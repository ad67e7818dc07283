"""
Travel planner package for the conversational trip planning agent.

This package contains:
- shared/: Common infrastructure (logging, contracts, schemas)
- planner/: Planner agent (extraction, stages, questions, scoring, graph)
- main.py: FastAPI application
"""

from travel_planner.planner.engine import PlannerEngineOutput, run_planner_engine
from travel_planner.planner.graph.build import create_planner_graph

__all__ = ["PlannerEngineOutput", "run_planner_engine", "create_planner_graph"]
