"""
Logging configuration for the planner service.

One entry point configures either the human-readable line format used in
development or JSON lines for log shippers. Turn events (turn start and
turn complete) carry a structured payload in both styles.
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


TEXT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpcore", "httpx", "uvicorn.access")

SESSION_PREFIX_RE = re.compile(r"^\[session=([^\]]+)\]")


class StructuredFormatter(logging.Formatter):
    """
    Render each record as one JSON object per line.

    Fields:
    - ts: record creation time (UTC, ISO format)
    - level / logger / message
    - session_id: lifted from the "[session=..]" message prefix, if any
    - event: payload attached by log_state_transition
    - exception: formatted traceback, if any
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
        }

        session = SESSION_PREFIX_RE.match(message)
        if session:
            entry["session_id"] = session.group(1)

        event_data = getattr(record, "event_data", None)
        if event_data is not None:
            entry["event"] = event_data

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the root logger for the whole service.

    Replaces any handlers installed earlier and quiets noisy third-party
    loggers.

    Args:
        level: Logging level or level name (e.g. "INFO")
        json_format: Emit JSON lines instead of the text format
        log_file: Optional file that receives the same records as stdout

    Returns:
        The configured root logger
    """
    if json_format:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(TEXT_LOG_FORMAT, datefmt=TEXT_DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=level.upper() if isinstance(level, str) else level,
        handlers=handlers,
        force=True,  # Override any prior basicConfig calls
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger()


def summarize_turn(turn: Dict[str, Any]) -> Dict[str, Any]:
    """Pick the loggable fields out of a planner turn state."""
    state = turn.get("state")
    questions = turn.get("questions") or []
    summary = {
        "stage": turn.get("stage"),
        "question_ids": [question.id for question in questions],
    }
    if state is not None:
        trip = state.trip
        summary.update(
            {
                "purpose_tags": list(trip.purpose_tags),
                "region": trip.region.free_text or trip.region.city,
                "dates": f"{trip.dates.start}~{trip.dates.end}" if trip.dates.start else "",
                "assumptions": len(state.dialog.assumptions),
            }
        )
    return summary


def log_state_transition(
    event: str,
    turn: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a planner turn event with a structured payload.

    The payload is attached to the record as `event_data`; the JSON
    formatter writes it out, the text formatter shows only the message.

    Args:
        event: Name of the event (e.g., "turn_start", "turn_complete")
        turn: Current turn state dictionary (key fields are extracted)
        extra: Additional fields merged into the payload
        logger: Logger instance to use. If not provided, uses default.
    """
    if logger is None:
        logger = logging.getLogger("travel_planner")

    session_id = turn.get("session_id", "unknown")
    event_data = {
        "event": event,
        "session_id": session_id,
        "state_summary": summarize_turn(turn),
    }
    if extra:
        event_data.update(extra)

    logger.info(f"[session={session_id}] State transition: {event}", extra={"event_data": event_data})
