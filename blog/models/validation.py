"""Presence validation for ORM records.

Models mix in ``Validatable`` and list the attributes that must be present in
``__presence_of__``. Validation runs on every flush: ``before_flush`` checks
each new and dirty record and raises ``RecordInvalid`` before any SQL is
emitted, so an invalid record is never written.
"""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from blog.core.errors import RecordInvalid

logger = logging.getLogger(__name__)

BLANK_MESSAGE = "can't be blank"


def is_blank(value: Any) -> bool:
    """None, empty, or whitespace only"""
    if value is None:
        return True
    if isinstance(value, str):
        return value == "" or value.isspace()
    return False


class Validatable:
    """Mixin for models with presence-validated attributes"""

    __presence_of__ = ()

    def validate(self) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}
        for attribute in self.__presence_of__:
            if is_blank(getattr(self, attribute, None)):
                errors.setdefault(attribute, []).append(BLANK_MESSAGE)
        return errors

    def is_valid(self) -> bool:
        return not self.validate()

    def full_messages(self) -> list[str]:
        errors = self.validate()
        return RecordInvalid(self, errors).full_messages() if errors else []


@event.listens_for(Session, "before_flush")
def validate_before_flush(session, flush_context, instances):
    for record in list(session.new) + list(session.dirty):
        if not isinstance(record, Validatable):
            continue
        errors = record.validate()
        if errors:
            logger.warning(
                "%s %s is invalid: %s",
                type(record).__name__, getattr(record, "id", None), errors
            )
            raise RecordInvalid(record, errors)
