"""Exceptions for enumparse library."""

from __future__ import annotations


class EnumParseError(Exception):
    """Base exception for all enumparse errors."""


class GenerationError(EnumParseError):
    """Exception raised when code can't be generated for a declaration.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'location' attribute names where in the
    declaration the problem was found, such as a variant ("Method.Other")
    or a directive ("truncate(x)"). The 'detailed_error' attribute can
    provide additional information useful for debugging purposes.
    """

    def __init__(
        self,
        message: str,
        *,
        location: str | None = None,
        detailed_error: str | None = None,
    ) -> None:
        """Initialize the GenerationError with a message."""
        super().__init__(message)
        self.message = message
        self.location = location
        self.detailed_error = detailed_error

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class DirectiveError(GenerationError):
    """Exception raised for a malformed option directive."""


class VariantDataError(GenerationError):
    """Exception raised when an enumeration variant carries data."""


class PatternConflictError(GenerationError):
    """Exception raised when two variants would be matched by the same string."""


class SchemaError(GenerationError):
    """Exception raised when a schema document is invalid."""


class GenerationFailed(EnumParseError):
    """Exception raised when one or more declarations failed to generate.

    All declarations in a document are processed independently so that
    every problem can be reported at once. The 'errors' attribute holds
    each individual GenerationError.
    """

    def __init__(self, errors: list[GenerationError]) -> None:
        """Initialize GenerationFailed with the collected errors."""
        super().__init__(f"Failed to generate code ({len(errors)} error(s))")
        self.errors = errors
