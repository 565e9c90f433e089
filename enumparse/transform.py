"""Normalization applied to parse function input before matching."""

from __future__ import annotations

import enum

from .options import Config

__all__ = ["Normalization"]


class Normalization(enum.Enum):
    """How the input string is normalized before it is matched.

    When both trimming and lowercasing are enabled, the input is trimmed
    first and then lowercased.
    """

    IDENTITY = "identity"
    TRIM = "trim"
    LOWERCASE = "lowercase"
    TRIM_LOWERCASE = "trim_lowercase"

    @classmethod
    def from_config(cls, config: Config) -> Normalization:
        """Return the normalization for the matching options."""
        if config.trim and config.lowercase:
            return cls.TRIM_LOWERCASE
        if config.trim:
            return cls.TRIM
        if config.lowercase:
            return cls.LOWERCASE
        return cls.IDENTITY

    def expression(self, name: str) -> str:
        """Return python source that normalizes the variable `name`."""
        return name + _METHOD_CALLS[self]

    def apply(self, value: str) -> str:
        """Normalize a value the same way generated code does."""
        if self in (Normalization.TRIM, Normalization.TRIM_LOWERCASE):
            value = value.strip()
        if self in (Normalization.LOWERCASE, Normalization.TRIM_LOWERCASE):
            value = value.lower()
        return value


_METHOD_CALLS = {
    Normalization.IDENTITY: "",
    Normalization.TRIM: ".strip()",
    Normalization.LOWERCASE: ".lower()",
    Normalization.TRIM_LOWERCASE: ".strip().lower()",
}
