"""Library for turning option directives into a matching configuration.

Three directives are recognized, in any order and combination:

  - `trim`: ignore surrounding whitespace in the input
  - `lowercase`: match variant names case insensitively
  - `truncate(N)`: also accept the first N characters of a variant name

Directives that are not recognized are ignored so that declarations can
carry options meant for other tools. This includes any directive written as
`name = value`, even `truncate = 3`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .exceptions import DirectiveError
from .parsing.directive import ParsedDirective, parse_directives

__all__ = [
    "Config",
    "parse_options",
]

_LOGGER = logging.getLogger(__name__)

TRIM = "trim"
LOWERCASE = "lowercase"
TRUNCATE = "truncate"

_INT_LITERAL_RE = re.compile(r"[0-9](?:_?[0-9])*")


@dataclass(frozen=True)
class Config:
    """Options that control how a parse function matches its input."""

    trim: bool = False
    """Strip surrounding whitespace before matching."""

    lowercase: bool = False
    """Lowercase both the variant names and the input before matching."""

    truncate: int | None = None
    """Number of leading characters of a variant name accepted as an alias."""


def _parse_truncate(directive: ParsedDirective) -> int:
    """Parse the argument of a truncate directive as a positive integer."""
    if directive.args is None:
        raise DirectiveError(
            "truncate requires a length argument, e.g. truncate(3)",
            location=directive.text(),
        )
    if len(directive.args) != 1:
        raise DirectiveError(
            f"truncate expects exactly one argument, got {len(directive.args)}",
            location=directive.text(),
        )
    arg = directive.args[0]
    if not _INT_LITERAL_RE.fullmatch(arg):
        raise DirectiveError(
            f"truncate argument must be an integer literal, got '{arg}'",
            location=directive.text(),
        )
    if (length := int(arg)) < 1:
        raise DirectiveError(
            f"truncate argument must be positive, got {length}",
            location=directive.text(),
        )
    return length


def parse_options(items: Iterable[str]) -> Config:
    """Parse a list of option directives into a Config.

    Will raise a DirectiveError when a directive is malformed.
    """
    trim = False
    lowercase = False
    truncate: int | None = None
    for directive in parse_directives(items):
        if directive.name == TRIM and directive.is_flag:
            trim = True
        elif directive.name == LOWERCASE and directive.is_flag:
            lowercase = True
        elif directive.name == TRUNCATE and directive.value is None:
            length = _parse_truncate(directive)
            if truncate is not None and truncate != length:
                raise DirectiveError(
                    f"Conflicting truncate lengths {truncate} and {length}",
                    location=directive.text(),
                )
            truncate = length
        else:
            _LOGGER.debug("Ignoring unrecognized directive %s", directive.text())
    return Config(trim=trim, lowercase=lowercase, truncate=truncate)
