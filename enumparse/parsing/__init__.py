"""Library for parsing the text inputs of a declaration."""

from .directive import ParsedDirective, parse_directive_text, parse_directives

__all__ = [
    "ParsedDirective",
    "parse_directive_text",
    "parse_directives",
]
