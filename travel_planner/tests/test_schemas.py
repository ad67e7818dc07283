"""
Unit tests for the planner schemas and the agent_response contract.
"""

import pytest
from pydantic import ValidationError

from travel_planner.planner.schemas import (
    PlannerState,
    Question,
    QuestionOption,
    TripState,
    Weights,
    initial_state,
)
from travel_planner.shared.contracts.agent_response import AgentResponse, UICard


class TestPlannerState:
    """Tests for the persisted state model."""

    def test_initial_state_defaults(self):
        state = initial_state()
        assert state.trip.travelers.adults == 1
        assert state.weights.total() == 1.25
        assert state.dialog.route_accepted == "unknown"
        assert state.dialog.attempts("q_origin") == 0

    def test_wire_format_is_camel_case(self):
        wire = initial_state().to_wire()
        assert set(wire) == {"trip", "weights", "weightRationale", "dialog"}
        assert "purposeTags" in wire["trip"]
        assert "offerDiverseOptions" in wire["dialog"]

    def test_snake_case_input_is_accepted(self):
        trip = TripState.model_validate({"purpose_tags": ["food"], "budget_style": "budget"})
        assert trip.purpose_tags == ["food"]

    def test_empty_categorical_is_unset(self):
        trip = TripState.model_validate({"budgetStyle": "", "stayLevel": "", "seatClass": "", "pace": ""})
        assert (trip.budget_style, trip.stay_level, trip.seat_class, trip.pace) == (None, None, None, None)

    def test_assignment_is_validated(self):
        weights = Weights()
        with pytest.raises(ValidationError):
            weights.price = 1.5

    def test_date_pattern(self):
        with pytest.raises(ValidationError):
            PlannerState.model_validate({"trip": {"dates": {"start": "March 10"}}})

    def test_date_must_exist_on_calendar(self):
        with pytest.raises(ValidationError):
            PlannerState.model_validate({"trip": {"dates": {"start": "2026-02-30", "end": "2026-03-02"}}})
        state = initial_state()
        with pytest.raises(ValidationError):
            state.trip.dates.end = "2026-04-31"

    def test_must_visit_limit(self):
        with pytest.raises(ValidationError):
            PlannerState.model_validate(
                {"trip": {"constraints": {"mustVisit": ["a", "b", "c", "d", "e", "f"]}}}
            )


class TestAgentResponse:
    """Tests for the agent_response contract."""

    def test_schema_example_validates(self):
        example = AgentResponse.model_config["json_schema_extra"]["example"]
        response = AgentResponse.model_validate(example)
        assert response.type == "agent_response"
        assert response.questions[0].allow_free_text is True

    def test_missing_state_is_rejected(self):
        with pytest.raises(ValidationError):
            AgentResponse.model_validate({"stage": "recommend"})

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ValidationError):
            AgentResponse.model_validate({"stage": "search", "state": {}, "debug": True})

    def test_question_cap(self):
        question = Question(id="q", text="?", options=[QuestionOption(label="a", value="a")])
        with pytest.raises(ValidationError):
            AgentResponse(stage="collect_intent", state=initial_state(), questions=[question] * 4)

    def test_wire_round_trip(self):
        response = AgentResponse(
            stage="recommend",
            state=initial_state(),
            ui={"cards": [UICard(type="flight", ref_id="f_1", cta_label="예매하러 가기")]},
        )
        wire = response.to_wire()
        assert wire["ui"]["cards"][0] == {"type": "flight", "refId": "f_1", "ctaLabel": "예매하러 가기"}
        assert AgentResponse.model_validate(wire) == response

    def test_invalid_stage(self):
        with pytest.raises(ValidationError):
            AgentResponse(stage="done", state=initial_state())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
