"""Errors raised by the model layer."""

from typing import Any


class RecordInvalid(Exception):
    """A record failed validation and was not persisted.

    ``errors`` maps attribute names to their messages, e.g.
    ``{"title": ["can't be blank"]}``.
    """

    def __init__(self, record: Any, errors: dict[str, list[str]]):
        self.record = record
        self.errors = errors
        super().__init__(f"Validation failed: {', '.join(self.full_messages())}")

    def full_messages(self) -> list[str]:
        return [
            f"{attribute.replace('_', ' ').capitalize()} {message}"
            for attribute, messages in self.errors.items()
            for message in messages
        ]

    def to_response(self) -> dict:
        return {"detail": str(self), "errors": self.errors}
