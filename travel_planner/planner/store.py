"""
File-backed planner state store.

One JSON document per conversation key. Loading never fails: a missing,
unreadable or invalid document yields a fresh default state. Saving
validates the whole state and replaces the file atomically.
"""

import asyncio
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from travel_planner.planner.errors import StateValidationError
from travel_planner.planner.graph.config import DEFAULT_CONFIG
from travel_planner.planner.schemas import PlannerState, initial_state


logger = logging.getLogger(__name__)


STATE_FILE_NAME = "state.json"
_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def merge_with_defaults(defaults: Dict[str, Any], stored: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively fill missing keys of a stored document from the defaults.

    Only nested structs with default keys are merged; maps with no default
    keys (question attempts) and lists are taken from the stored document
    as-is. Keys unknown to the defaults are kept so validation can see them.
    """
    merged = dict(stored)
    for key, default in defaults.items():
        if key not in stored or (stored[key] is None and default is not None):
            merged[key] = default
        elif isinstance(default, dict) and default and isinstance(stored[key], dict):
            merged[key] = merge_with_defaults(default, stored[key])
    return merged


class PlannerStateStore:
    """
    Load-or-default / validate-and-replace storage for PlannerState.

    Each key (session id) maps to `<base_dir>/<key>/state.json`. Use
    `lock(key)` around a load-mutate-save cycle when turns for the same key
    can run concurrently.
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = Path(base_dir or DEFAULT_CONFIG.state_dir)
        self._locks: Dict[str, asyncio.Lock] = {}

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid state key: {key!r}")
        return self.base_dir / key / STATE_FILE_NAME

    def lock(self, key: str) -> asyncio.Lock:
        """Per-key mutual exclusion for load-mutate-save cycles. Rejects invalid keys."""
        self.path_for(key)
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def load(self, key: str) -> PlannerState:
        """
        Load the state for `key`, falling back to a fresh default.

        Invalid documents are logged and discarded; the error is never
        raised to the caller.
        """
        path = self.path_for(key)
        if not path.exists():
            return initial_state()

        try:
            with open(path, "r", encoding="utf-8") as f:
                stored = json.load(f)
            if not isinstance(stored, dict):
                raise ValueError("state document is not an object")
            merged = merge_with_defaults(initial_state().to_wire(), stored)
            return PlannerState.model_validate(merged)
        except (OSError, ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(f"[state={key}] Discarding unreadable planner state: {e}")
            return initial_state()

    def save(self, key: str, state: PlannerState) -> Path:
        """
        Validate and atomically write the state for `key`.

        Raises:
            StateValidationError: If the state violates the schema
        """
        try:
            validated = PlannerState.model_validate(state.model_dump())
        except ValidationError as e:
            raise StateValidationError(f"Planner state for {key!r} is invalid: {e}") from e

        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".state-", suffix=".json", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(validated.to_wire(), f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        return path

    def delete(self, key: str) -> bool:
        """Remove the stored state. Returns False if nothing was stored."""
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        self._locks.pop(key, None)
        return True
