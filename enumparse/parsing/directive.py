"""Parse option directives attached to an enumeration declaration.

A declaration carries a list of directives that control how the generated
parse function matches input. Each item of the list is a string holding one
or more comma separated directives, and a directive is either a bare flag
or a name followed by a parenthesized argument list. A name may also be
assigned a value, as in `rename = "x"`, which none of the known directives
use but which is still valid syntax:

  trim, lowercase, truncate(3)

This would create a list of ParsedDirective objects:

  [
    ParsedDirective(name='trim', args=None),
    ParsedDirective(name='lowercase', args=None),
    ParsedDirective(name='truncate', args=['3']),
  ]

This grammar is defined using pyparsing. The responsibility here is only to
split the text into names and arguments. The meaning of each directive,
including whether its arguments are valid, is handled by `enumparse.options`.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable
from dataclasses import dataclass

import pyparsing
from pyparsing import (
    Group,
    Literal,
    Optional,
    ParserElement,
    QuotedString,
    Regex,
    StringEnd,
    Suppress,
    ZeroOrMore,
    original_text_for,
)

from enumparse.exceptions import DirectiveError

_LOGGER = logging.getLogger(__name__)

_OPEN = "("
_ASSIGN = "="


@dataclass
class ParsedDirective:
    """A single option directive."""

    name: str

    args: list[str] | None = None
    """Arguments as written, or None when the directive is a bare flag.

    An empty list means the directive had parentheses with nothing in them,
    which is different from having no parentheses at all.
    """

    value: str | None = None
    """Value assigned with `name = value`, if any."""

    @property
    def is_flag(self) -> bool:
        """Return true if the directive was written without arguments."""
        return self.args is None and self.value is None

    def text(self) -> str:
        """Return the directive formatted as it would be written."""
        if self.value is not None:
            return f"{self.name} = {self.value}"
        if self.args is None:
            return self.name
        return f"{self.name}({', '.join(self.args)})"


def _directive_grammar() -> ParserElement:
    name = Regex(r"[^\W\d]\w*")
    value = QuotedString('"', unquote_results=False) | Regex(r"[^,()=\s\"]+")
    arg = original_text_for(value + Optional(_ASSIGN + value))
    arg_list = arg + ZeroOrMore(Suppress(",") + arg)
    # The open paren is kept in the results so "name" and "name()" differ
    call = Literal(_OPEN) + Optional(arg_list) + Suppress(")")
    assign = Literal(_ASSIGN) + value
    directive = Group(name + Optional(call | assign))
    return Optional(directive + ZeroOrMore(Suppress(",") + directive)) + StringEnd()


_GRAMMAR = _directive_grammar()


def parse_directive_text(text: str) -> list[ParsedDirective]:
    """Parse a single string of comma separated directives.

    Will raise a DirectiveError on failure.
    """
    try:
        results = _GRAMMAR.parse_string(text, parse_all=True)
    except pyparsing.ParseException as err:
        raise DirectiveError(
            "Invalid directive syntax", location=text, detailed_error=str(err)
        ) from err
    directives: list[ParsedDirective] = []
    for tokens in results:
        name, *rest = list(tokens)
        if rest and rest[0] == _OPEN:
            directives.append(ParsedDirective(name=name, args=list(rest[1:])))
        elif rest and rest[0] == _ASSIGN:
            directives.append(ParsedDirective(name=name, value=rest[1]))
        else:
            directives.append(ParsedDirective(name=name))
    return directives


def parse_directives(
    items: Iterable[str],
) -> Generator[ParsedDirective, None, None]:
    """Parse a list of directive strings into ParsedDirective objects."""
    for item in items:
        if not item.strip():
            continue
        _LOGGER.debug("Parsing directives %r", item)
        yield from parse_directive_text(item)
