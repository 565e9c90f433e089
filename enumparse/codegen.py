"""Library for generating python source for enumeration parsers.

Each declaration runs through the same steps: the option directives are
parsed, the variants are checked to be unit variants, the match table is
built and checked for ambiguous patterns, and finally the source code is
emitted. Any failure stops generation for the declaration and nothing is
emitted for it.

For example, a declaration of the enum `Color` with the variants `Red` and
`Green` and the options `trim, lowercase` generates the following:

```python
class Color(enum.Enum):
    Red = 'Red'
    Green = 'Green'


class ParseColorError(ValueError):
    ...


def parse_color(value: str) -> Color:
    match value.strip().lower():
        case 'red':
            return Color.Red
        case 'green':
            return Color.Green
    raise ParseColorError(value)
```

The error raised by a parse function always carries the original input,
before any normalization.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from .exceptions import (
    DirectiveError,
    GenerationError,
    GenerationFailed,
    SchemaError,
)
from .match_table import MatchEntry, build_match_table, check_conflicts
from .options import Config, parse_options
from .schema import EnumDeclaration, SchemaDocument, validate_unit_variants
from .transform import Normalization

__all__ = [
    "GeneratedEnum",
    "derive",
    "generate_module",
    "render_module",
]

_LOGGER = logging.getLogger(__name__)

INDENT = "    "
HEADER = "# Generated by enumparse. Do not edit."
DEFAULT_MODULE_DOC = "Parsers for enumerations generated by enumparse."
UNKNOWN_VARIANT_FORMAT = "Unknown variant: {value}"

# Names looked up by the module preamble and the emitted classes and
# functions, which an enumeration must not shadow
_RESERVED_NAMES = frozenset(
    {
        "enum",
        "annotations",
        "value",
        "NotImplemented",
        "ValueError",
        "bool",
        "hash",
        "int",
        "isinstance",
        "object",
        "str",
        "super",
        "type",
    }
)

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def snake_case(name: str) -> str:
    """Convert a CamelCase name into snake_case."""
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


@dataclass
class GeneratedEnum:
    """The source generated for a single enumeration declaration."""

    name: str
    error_name: str
    parse_name: str
    config: Config
    table: list[MatchEntry]
    source: str = field(repr=False)

    @property
    def normalization(self) -> Normalization:
        """Return the normalization applied by the parse function."""
        return Normalization.from_config(self.config)

    @property
    def defined_names(self) -> list[str]:
        """Return the top level names defined by the generated source."""
        return [self.name, self.error_name, self.parse_name]


def _docstring(text: str, indent: str) -> list[str]:
    """Format text as the lines of a docstring."""
    text = text.strip().replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        head = text[:-1]
        # An odd number of backslashes means the quote is already escaped
        if (len(head) - len(head.rstrip("\\"))) % 2 == 0:
            text = head + '\\"'
    lines = text.splitlines() or [""]
    if len(lines) == 1:
        return [f'{indent}"""{lines[0]}"""']
    result = [f'{indent}"""{lines[0]}']
    result.extend(f"{indent}{line}" if line.strip() else "" for line in lines[1:])
    result.append(f'{indent}"""')
    return result


def emit_enum(declaration: EnumDeclaration) -> list[str]:
    """Emit the enumeration class with one member per variant."""
    lines = [f"class {declaration.name}(enum.Enum):"]
    if declaration.doc:
        lines.extend(_docstring(declaration.doc, INDENT))
        if declaration.variants:
            lines.append("")
    for variant in declaration.variants:
        lines.append(f"{INDENT}{variant.name} = {variant.name!r}")
    if not declaration.doc and not declaration.variants:
        lines.append(f"{INDENT}pass")
    return lines


def emit_error(enum_name: str, error_name: str) -> list[str]:
    """Emit the error type raised when a string does not match a variant."""
    message = UNKNOWN_VARIANT_FORMAT.format(value="{self.value}")
    return [
        f"class {error_name}(ValueError):",
        f'{INDENT}"""Error parsing a {enum_name}, raised for an unknown variant.',
        "",
        f"{INDENT}The 'value' attribute holds the string exactly as it was passed",
        f"{INDENT}to the parse function.",
        f'{INDENT}"""',
        "",
        f"{INDENT}def __init__(self, value: str) -> None:",
        f"{INDENT * 2}super().__init__(value)",
        f"{INDENT * 2}self.value = value",
        "",
        f"{INDENT}def __str__(self) -> str:",
        f'{INDENT * 2}return f"{message}"',
        "",
        f"{INDENT}def __eq__(self, other: object) -> bool:",
        f"{INDENT * 2}if not isinstance(other, {error_name}):",
        f"{INDENT * 3}return NotImplemented",
        f"{INDENT * 2}return self.value == other.value",
        "",
        f"{INDENT}def __hash__(self) -> int:",
        f"{INDENT * 2}return hash((type(self), self.value))",
    ]


def emit_parse_function(
    enum_name: str,
    error_name: str,
    parse_name: str,
    table: Iterable[MatchEntry],
    normalization: Normalization,
) -> list[str]:
    """Emit the function that parses a string into a variant.

    Cases are emitted in table order. A pattern that already has a case is
    skipped since it could never match.
    """
    lines = [
        f"def {parse_name}(value: str) -> {enum_name}:",
        f'{INDENT}"""Parse a {enum_name} from a string.',
        "",
        f"{INDENT}Raises {error_name} when the string does not match a variant.",
        f'{INDENT}"""',
    ]
    cases: list[str] = []
    emitted: set[str] = set()
    for entry in table:
        if entry.pattern in emitted:
            continue
        emitted.add(entry.pattern)
        cases.append(f"{INDENT * 2}case {entry.pattern!r}:")
        cases.append(f"{INDENT * 3}return {enum_name}.{entry.variant}")
    if cases:
        lines.append(f"{INDENT}match {normalization.expression('value')}:")
        lines.extend(cases)
    lines.append(f"{INDENT}raise {error_name}(value)")
    return lines


def _parse_config(declaration: EnumDeclaration) -> Config:
    try:
        return parse_options(declaration.options)
    except DirectiveError as err:
        raise DirectiveError(
            err.message,
            location=f"{declaration.name}: {err.location}",
            detailed_error=err.detailed_error,
        ) from err


def derive(declaration: EnumDeclaration) -> GeneratedEnum:
    """Generate the enumeration, error type and parse function source.

    Will raise a GenerationError if the declaration is invalid.
    """
    _LOGGER.debug("Generating parser for %s", declaration.name)
    if declaration.name in _RESERVED_NAMES:
        raise SchemaError(
            f"'{declaration.name}' is reserved by generated code",
            location=declaration.name,
        )
    config = _parse_config(declaration)
    validate_unit_variants(declaration)
    table = build_match_table(declaration.variant_names, config)
    check_conflicts(declaration.name, table)
    normalization = Normalization.from_config(config)

    error_name = f"Parse{declaration.name}Error"
    parse_name = f"parse_{snake_case(declaration.name)}"
    blocks = [
        emit_enum(declaration),
        emit_error(declaration.name, error_name),
        emit_parse_function(
            declaration.name, error_name, parse_name, table, normalization
        ),
    ]
    source = "\n\n\n".join("\n".join(block) for block in blocks)
    return GeneratedEnum(
        name=declaration.name,
        error_name=error_name,
        parse_name=parse_name,
        config=config,
        table=table,
        source=source,
    )


def render_module(generated: Iterable[GeneratedEnum], doc: str | None = None) -> str:
    """Assemble generated enumerations into the source of a module."""
    generated = list(generated)
    lines = [HEADER]
    lines.extend(_docstring(doc or DEFAULT_MODULE_DOC, ""))
    lines.extend(["", "from __future__ import annotations", "", "import enum", ""])
    lines.append("__all__ = [")
    for item in generated:
        lines.extend(f"{INDENT}{name!r}," for name in item.defined_names)
    lines.append("]")
    result = "\n".join(lines)
    for item in generated:
        result += "\n\n\n" + item.source
    return result + "\n"


def generate_module(document: SchemaDocument) -> str:
    """Generate a module for every enumeration in the document.

    Every declaration is generated independently and all errors are
    collected. Will raise GenerationFailed if any declaration failed, in
    which case no source is returned.
    """
    errors: list[GenerationError] = []
    generated: list[GeneratedEnum] = []
    defined: dict[str, str] = {}
    for declaration in document.enums:
        try:
            item = derive(declaration)
        except GenerationError as err:
            _LOGGER.debug("Failed to generate %s: %s", declaration.name, err)
            errors.append(err)
            continue
        for name in item.defined_names:
            if (other := defined.get(name)) is not None:
                errors.append(
                    SchemaError(
                        f"'{name}' is already defined by enum '{other}'",
                        location=declaration.name,
                    )
                )
            defined[name] = declaration.name
        generated.append(item)
    if errors:
        raise GenerationFailed(errors)
    return render_module(generated, document.doc)
