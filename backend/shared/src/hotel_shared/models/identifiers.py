"""Canonical identifier value type.

Identifiers reach the service from several places (gateway headers, path
parameters, stored items). They are compared only after being parsed into
an EntityId so that formatting differences never decide ownership.
"""

import uuid
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class EntityId:
    """Canonical form of a hotel, user or room identifier."""

    value: str

    @classmethod
    def parse(cls, raw: Union["EntityId", uuid.UUID, str]) -> "EntityId":
        """Parse a raw identifier into its canonical form.

        Surrounding whitespace is dropped and UUID-shaped values are
        normalized to lowercase hyphenated text.

        Args:
            raw: Identifier as received

        Returns:
            EntityId with the canonical value

        Raises:
            ValueError: If the identifier is empty
        """
        if isinstance(raw, EntityId):
            return raw
        if isinstance(raw, uuid.UUID):
            return cls(str(raw))

        text = str(raw).strip()
        if not text:
            raise ValueError("Identifier must not be empty")

        try:
            return cls(str(uuid.UUID(text)))
        except ValueError:
            return cls(text)

    @classmethod
    def generate(cls) -> "EntityId":
        """Create a new random identifier."""
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value
