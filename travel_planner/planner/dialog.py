"""
Dialog bookkeeping helpers.

Append-only traces (reasoning log, assumptions) with their caps, and the
asked-question memory used for anti-repetition and attempt counting.
"""

from typing import List

from travel_planner.planner.schemas import PlannerState


REASONING_LOG_LIMIT = 80
ASSUMPTION_LIMIT = 40


def push_reasoning(
    state: PlannerState,
    message: str,
    limit: int = REASONING_LOG_LIMIT,
) -> None:
    """Append a reasoning trace line, keeping only the newest `limit` lines."""
    log = state.dialog.reasoning_log
    log.append(message)
    if len(log) > limit:
        del log[:-limit]


def push_assumption(
    state: PlannerState,
    message: str,
    limit: int = ASSUMPTION_LIMIT,
) -> None:
    """Record an injected default in assumptions and mirror it to the reasoning log."""
    assumptions = state.dialog.assumptions
    assumptions.append(message)
    if len(assumptions) > limit:
        del assumptions[:-limit]
    push_reasoning(state, f"[가정] {message}")


def remember_asked_questions(state: PlannerState, question_ids: List[str]) -> None:
    """Store this turn's question ids and bump their attempt counters."""
    state.dialog.last_asked_question_ids = list(question_ids)
    attempts = state.dialog.question_attempts
    for question_id in question_ids:
        attempts[question_id] = attempts.get(question_id, 0) + 1


def questions_are_repeated(state: PlannerState, question_ids: List[str]) -> bool:
    """True if every id was already asked in the previous turn."""
    if not question_ids:
        return False
    previous = state.dialog.last_asked_question_ids
    if not previous:
        return False
    return all(question_id in previous for question_id in question_ids)
