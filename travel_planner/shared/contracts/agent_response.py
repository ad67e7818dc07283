"""
Planner agent response contract.

Defines the single externally visible artifact produced per turn. Every
response is validated against this contract before it leaves the engine;
a validation failure is an internal bug, not a user-input problem.
"""

from typing import List, Literal

from pydantic import ConfigDict, Field

from travel_planner.planner.schemas import PlannerState, Question, Results, Stage
from travel_planner.shared.schemas.base import CamelModel


class UICard(CamelModel):
    """Clickable shortcut card pointing at a flight, stay or place result."""

    type: Literal["flight", "stay", "place"]
    ref_id: str = Field(min_length=1, description="id of the referenced result")
    cta_label: str = Field(min_length=1, description="Call-to-action label")


class UIPayload(CamelModel):
    cards: List[UICard] = Field(default_factory=list)


class AgentResponse(CamelModel):
    """
    Contract for one planner turn (agent_response).

    Carries the stage the conversation is in, up to three clarifying
    questions, the full state snapshot, scored results and UI cards.
    Unknown keys are rejected.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "type": "agent_response",
                "stage": "collect_intent",
                "questions": [
                    {
                        "id": "q_budget_style",
                        "text": "가격 vs 퀄리티 중 어디가 더 중요해?",
                        "options": [
                            {"label": "최저가", "value": "budget"},
                            {"label": "균형", "value": "balanced"},
                        ],
                        "allowFreeText": True,
                    }
                ],
                "state": {},
                "results": {"flights": [], "stays": [], "routeDraft": []},
                "ui": {"cards": []},
            }
        },
    )

    type: Literal["agent_response"] = "agent_response"
    stage: Stage
    questions: List[Question] = Field(default_factory=list, max_length=3)
    state: PlannerState
    results: Results = Field(default_factory=Results)
    ui: UIPayload = Field(default_factory=UIPayload)
