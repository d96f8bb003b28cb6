"""Domain value objects for Quill.

Value objects are immutable and defined by their values, not identity.
"""

import re

from pydantic import field_validator

from quill.domain.value.common import RootValueObject

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Email(RootValueObject[str]):
    """User email address.

    Stored lower-cased so lookups are case-insensitive.
    """

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate and normalise the address."""
        v = v.strip().lower()
        if len(v) > 255 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class DisplayName(RootValueObject[str]):
    """Name shown next to a user's posts and comments."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate name is not blank and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Name must be 1-100 characters")
        return v
