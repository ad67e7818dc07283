"""Graph nodes for the planner agent."""

from travel_planner.planner.nodes.extract import extract_node
from travel_planner.planner.nodes.resolve import resolve_node
from travel_planner.planner.nodes.search import search_node
from travel_planner.planner.nodes.questions import questions_node
from travel_planner.planner.nodes.recommend import recommend_node
from travel_planner.planner.nodes.finalize import finalize_node, build_ui_cards
from travel_planner.planner.nodes.routing import (
    route_after_resolve,
    route_after_search,
    route_after_questions,
)

__all__ = [
    "extract_node",
    "resolve_node",
    "search_node",
    "questions_node",
    "recommend_node",
    "finalize_node",
    "build_ui_cards",
    "route_after_resolve",
    "route_after_search",
    "route_after_questions",
]
