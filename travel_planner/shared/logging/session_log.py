"""
Per-session conversation history.

Writes one JSON Lines file per session to the logs/ directory. Entries are
chained: each entry's parentUuid is the uuid of the entry written before it.
"""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


# Session-based history registry to ensure the same instance is reused
_history_registry: Dict[str, "SessionHistoryLog"] = {}


def get_or_create_history(session_id: str, logs_dir: str = "logs") -> "SessionHistoryLog":
    """
    Get an existing history log for the session or create a new one.

    Args:
        session_id: Unique session identifier
        logs_dir: Directory to store history files (default: "logs")

    Returns:
        SessionHistoryLog instance for this session
    """
    if session_id not in _history_registry:
        _history_registry[session_id] = SessionHistoryLog(session_id, logs_dir)
    return _history_registry[session_id]


def remove_history(session_id: str) -> None:
    """Remove a history log from the registry (e.g., after the session is deleted)."""
    _history_registry.pop(session_id, None)


class SessionHistoryLog:
    """
    Append-only conversation history for one session.

    Each line is a user or assistant entry with uuid/parentUuid chaining, so
    the conversation can be replayed in order.
    """

    def __init__(self, session_id: str, logs_dir: str = "logs"):
        self.session_id = session_id
        self.session_dir = Path(logs_dir) / session_id
        self.history_file = self.session_dir / "history.jsonl"

        self.session_dir.mkdir(parents=True, exist_ok=True)

        # Resume the chain from an existing file
        self._last_uuid: Optional[str] = None
        entries = self.read_entries()
        if entries:
            self._last_uuid = entries[-1].get("uuid")

    def _get_timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _append(self, entry_type: str, message: Dict[str, Any]) -> Dict[str, Any]:
        entry = {
            "type": entry_type,
            "uuid": str(uuid.uuid4()),
            "parentUuid": self._last_uuid,
            "sessionId": self.session_id,
            "timestamp": self._get_timestamp(),
            "message": message,
        }

        with open(self.history_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")

        self._last_uuid = entry["uuid"]
        return entry

    def append_user(self, text: str) -> Dict[str, Any]:
        """Record a user turn."""
        return self._append("user", {"role": "user", "content": text})

    def append_assistant(self, response: Dict[str, Any]) -> Dict[str, Any]:
        """Record the agent_response payload produced for a turn."""
        return self._append("assistant", {"role": "assistant", "content": response})

    def read_entries(self) -> List[Dict[str, Any]]:
        """Read all entries in write order. Unparseable lines are skipped."""
        if not self.history_file.exists():
            return []

        entries = []
        with open(self.history_file, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
        return entries
