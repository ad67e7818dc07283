"""
Turn state schema for the planner graph.

One graph run handles exactly one user turn. The persisted PlannerState
travels inside this dict alongside the per-turn working values (stage,
questions, results) and the injected collaborators.
"""

from datetime import date
from typing import Any, List, Optional, TypedDict

from travel_planner.planner.graph.config import PlannerConfig
from travel_planner.planner.schemas import PlannerState, Question, Results, Stage
from travel_planner.shared.contracts.agent_response import AgentResponse


class TurnState(TypedDict, total=False):
    """
    State schema for the planner graph.

    Fields:
        session_id: Session identifier for log context
        user_text: Raw user turn
        is_blank: True when the turn has no text (no defaults are injected)
        today: Reference date for relative dates
        prev_state: Planner state before this turn (never mutated)
        state: Working copy of the planner state
        stage: Current stage
        questions: Questions to return this turn
        results: Scored candidates and route draft
        response: Validated agent_response (set by the finalize node)
        tools: TravelToolProvider used by the search and recommend nodes
        config: Planner configuration
    """

    session_id: str
    user_text: str
    is_blank: bool
    today: Optional[date]

    prev_state: PlannerState
    state: PlannerState
    stage: Stage
    questions: List[Question]
    results: Results
    response: Optional[AgentResponse]

    tools: Any
    config: PlannerConfig
