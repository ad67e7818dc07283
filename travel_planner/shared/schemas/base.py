"""
Base model for planner schemas.

Defines the common pydantic configuration shared by every persisted or
surfaced structure: snake_case attributes in Python, camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model with camelCase aliases.

    Fields are declared in snake_case and serialized with their camelCase
    alias (``allow_free_text`` -> ``allowFreeText``). Both spellings are
    accepted on input so persisted state and API payloads round-trip.

    Assignments are validated so a node that writes an out-of-range value
    fails at the write, not at the end of the turn.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_wire(self) -> dict:
        """Dump to a JSON-compatible dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
