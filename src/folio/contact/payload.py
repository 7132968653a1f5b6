"""Parsing and sanitising contact form submissions."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Annotated, Any, Final

from pydantic import BaseModel, BeforeValidator, ConfigDict

HONEYPOT_FIELDS: Final[tuple[str, ...]] = ("company", "website", "hp")
EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def clean(value: Any, max_length: int = 2000) -> str:
    """Strip carriage returns and surrounding whitespace, then truncate.

    Anything that is not a string becomes an empty string.
    """
    text = value if isinstance(value, str) else ""
    return text.replace("\r", "").strip()[:max_length]


def looks_like_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def _cleaned(max_length: int) -> BeforeValidator:
    return BeforeValidator(lambda value: clean(value, max_length))


class ContactSubmission(BaseModel):
    """A cleaned submission. Validation never fails; emptiness is checked by the caller."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Annotated[str, _cleaned(120)] = ""
    email: Annotated[str, _cleaned(200)] = ""
    subject: Annotated[str, _cleaned(200)] = ""
    message: Annotated[str, _cleaned(5000)] = ""
    honeypot: Annotated[str, _cleaned(200)] = ""

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> ContactSubmission:
        trap = next((body[key] for key in HONEYPOT_FIELDS if body.get(key) is not None), "")
        return cls.model_validate(
            {
                "name": body.get("name"),
                "email": body.get("email"),
                "subject": body.get("subject"),
                "message": body.get("message"),
                "honeypot": trap,
            }
        )

    @property
    def is_spam(self) -> bool:
        return bool(self.honeypot)

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.email and self.message)

    @property
    def has_valid_email(self) -> bool:
        return looks_like_email(self.email)
