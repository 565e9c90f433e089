"""Generate string parsers for enumerations.

An enumeration is declared by name with an ordered list of variants and a
few option directives (`trim`, `lowercase`, `truncate(N)`). From that
declaration enumparse generates python source for the enumeration itself,
an error type named `Parse<Name>Error`, and a function that parses a string
into one of the variants.
"""

from .codegen import GeneratedEnum, derive, generate_module
from .options import Config, parse_options
from .schema import EnumDeclaration, SchemaDocument, Variant, load_schema

__all__ = [
    "Config",
    "EnumDeclaration",
    "GeneratedEnum",
    "SchemaDocument",
    "Variant",
    "derive",
    "generate_module",
    "load_schema",
    "parse_options",
    "cli",
    "codegen",
    "compat",
    "exceptions",
    "loader",
    "match_table",
    "options",
    "parsing",
    "schema",
    "transform",
]
