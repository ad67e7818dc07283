"""
Question node for the planner graph.

Builds the clarifying questions for collect stages, with anti-repetition:
when every candidate was already asked last turn, the ambiguity resolver
gets a second chance to move the stage forward.
"""

import logging
from typing import Any, Dict

from travel_planner.planner.ambiguity import apply_ambiguity_assumptions
from travel_planner.planner.dialog import questions_are_repeated
from travel_planner.planner.graph.state import TurnState
from travel_planner.planner.questions import generate_questions, origin_question
from travel_planner.planner.stage import derive_stage, has_origin_or_undecided, is_collect_stage


logger = logging.getLogger(__name__)


def questions_node(state: TurnState) -> Dict[str, Any]:
    """
    Select up to max_questions questions for the current collect stage.

    Args:
        state: Current turn state

    Returns:
        Dictionary with state updates to apply
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [node=ask] "

    planner_state = state["state"]
    config = state["config"]
    stage = state["stage"]
    last_asked = planner_state.dialog.last_asked_question_ids

    questions = generate_questions(stage, planner_state, config.max_questions, avoid_ids=last_asked)

    if questions_are_repeated(planner_state, [question.id for question in questions]):
        if state.get("is_blank"):
            logger.info(f"{_log}Repeated questions on a blank turn, keeping stage={stage}")
        else:
            logger.info(f"{_log}Repeated questions, re-running assumptions | stage={stage}")
            apply_ambiguity_assumptions(
                planner_state, state.get("user_text", ""), stage, state.get("today")
            )
            stage = derive_stage(planner_state)
            if is_collect_stage(stage):
                questions = generate_questions(
                    stage, planner_state, config.max_questions, avoid_ids=last_asked
                )
            else:
                questions = []

    if stage == "collect_weights" and not has_origin_or_undecided(planner_state):
        if not any(question.id == "q_origin" for question in questions):
            questions.insert(0, origin_question())

    logger.info(
        f"{_log}Node finished | stage={stage}, "
        f"question_ids={[question.id for question in questions]}"
    )

    return {"state": planner_state, "stage": stage, "questions": questions}
