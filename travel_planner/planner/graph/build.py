"""
Graph construction for the planner agent.

Builds and compiles the LangGraph workflow that handles one user turn.
"""

from typing import Optional

from langgraph.graph import StateGraph, END

from travel_planner.planner.graph.config import PlannerConfig, DEFAULT_CONFIG
from travel_planner.planner.graph.state import TurnState
from travel_planner.planner.nodes import (
    extract_node,
    resolve_node,
    search_node,
    questions_node,
    recommend_node,
    finalize_node,
    route_after_resolve,
    route_after_search,
    route_after_questions,
)


def create_planner_graph(
    config: Optional[PlannerConfig] = None,
):
    """
    Create and compile the LangGraph workflow for one planner turn.

    The graph structure is:
        Entry → extract → resolve → route_after_resolve()
                                      ├→ search → route_after_search()
                                      │             ├→ recommend → finalize
                                      │             └→ finalize
                                      └→ ask → route_after_questions()
                                                      ├→ search
                                                      └→ finalize
        finalize → END

    The tool provider and config travel in the turn state, so one compiled
    graph serves every session.

    Args:
        config: Optional configuration. Uses DEFAULT_CONFIG if not provided.

    Returns:
        Compiled LangGraph application ready for execution.
    """
    if config is None:
        config = DEFAULT_CONFIG

    graph = StateGraph(TurnState)

    # Add nodes
    graph.add_node("extract", extract_node)
    graph.add_node("resolve", resolve_node)
    graph.add_node("search", search_node)
    graph.add_node("ask", questions_node)
    graph.add_node("recommend", recommend_node)
    graph.add_node("finalize", finalize_node)

    # Set entry point and edges
    graph.set_entry_point("extract")
    graph.add_edge("extract", "resolve")

    graph.add_conditional_edges(
        "resolve",
        route_after_resolve,
        {
            "search": "search",
            "ask": "ask",
        },
    )
    graph.add_conditional_edges(
        "search",
        route_after_search,
        {
            "recommend": "recommend",
            "finalize": "finalize",
        },
    )
    graph.add_conditional_edges(
        "ask",
        route_after_questions,
        {
            "search": "search",
            "finalize": "finalize",
        },
    )

    graph.add_edge("recommend", "finalize")
    graph.add_edge("finalize", END)

    # Compile
    app = graph.compile()

    return app
