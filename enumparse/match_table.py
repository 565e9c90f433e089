"""Library for building the table of strings matched by a parse function.

The match table is an ordered list of (pattern, variant) entries. A parse
function compares its normalized input against each pattern in order and
the first exact match wins.

The table starts with one primary entry per variant, in declaration order.
When truncation is enabled, an alias entry follows for every variant whose
name is longer than the truncation length. For example, the variants
`Get` and `Post` with `truncate(2)` produce:

  [
    MatchEntry(pattern='Get', variant='Get'),
    MatchEntry(pattern='Post', variant='Post'),
    MatchEntry(pattern='Ge', variant='Get', alias=True),
    MatchEntry(pattern='Po', variant='Post', alias=True),
  ]

Because primary entries come first, a full variant name always takes
precedence over an alias of another variant that happens to be equal.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from . import compat
from .exceptions import PatternConflictError
from .options import Config

__all__ = [
    "MatchEntry",
    "build_match_table",
    "check_conflicts",
]

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchEntry:
    """A pattern string and the variant it parses to."""

    pattern: str
    variant: str
    alias: bool = False


def primary_pattern(name: str, config: Config) -> str:
    """Return the full pattern matched for a variant name."""
    return name.lower() if config.lowercase else name


def alias_pattern(name: str, config: Config) -> str | None:
    """Return the truncated pattern for a variant name, if it has one.

    Truncation counts characters (code points) of the original name, before
    any lowercasing is applied.
    """
    if config.truncate is None or len(name) <= config.truncate:
        return None
    truncated = name[: config.truncate]
    pattern = truncated.lower() if config.lowercase else truncated
    if pattern == primary_pattern(name, config):
        return None
    return pattern


def build_match_table(variants: Sequence[str], config: Config) -> list[MatchEntry]:
    """Build the ordered match table for the variant names."""
    table = [
        MatchEntry(pattern=primary_pattern(name, config), variant=name)
        for name in variants
    ]
    if config.truncate is not None:
        for name in variants:
            if (pattern := alias_pattern(name, config)) is None:
                continue
            table.append(MatchEntry(pattern=pattern, variant=name, alias=True))
    _LOGGER.debug("Built match table %s", table)
    return table


def check_conflicts(enum_name: str, table: Sequence[MatchEntry]) -> None:
    """Verify that no string would be ambiguous between two variants.

    An alias that is equal to the full pattern of another variant is allowed
    and never matches, since the full name comes first. Two full patterns
    that are equal, or two aliases of different variants that are equal, are
    rejected with a PatternConflictError. The check for equal aliases is
    skipped when `compat.enable_first_match_aliases` is active, where the
    earlier variant wins.
    """
    primaries: dict[str, str] = {}
    aliases: dict[str, str] = {}
    for entry in table:
        if not entry.alias:
            if (other := primaries.get(entry.pattern)) is not None:
                raise PatternConflictError(
                    f"Variants '{other}' and '{entry.variant}' both match "
                    f"'{entry.pattern}'",
                    location=f"{enum_name}.{entry.variant}",
                )
            primaries[entry.pattern] = entry.variant
            continue
        if (other := primaries.get(entry.pattern)) is not None:
            _LOGGER.debug(
                "Alias '%s' of %s is shadowed by variant %s",
                entry.pattern,
                entry.variant,
                other,
            )
            continue
        if (other := aliases.get(entry.pattern)) is not None:
            if compat.is_first_match_aliases_enabled():
                _LOGGER.debug(
                    "Alias '%s' is ambiguous, %s takes precedence over %s",
                    entry.pattern,
                    other,
                    entry.variant,
                )
                continue
            raise PatternConflictError(
                f"Truncated alias '{entry.pattern}' matches both '{other}' and "
                f"'{entry.variant}'",
                location=f"{enum_name}.{entry.variant}",
            )
        aliases[entry.pattern] = entry.variant
