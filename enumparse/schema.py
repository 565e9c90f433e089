"""Data model for enumeration declarations.

A schema document describes one or more enumerations to generate code for.
Each enumeration has a name, an ordered list of variants, and the option
directives that control matching. This is an example schema document:

```json
{
  "enums": [
    {
      "name": "Method",
      "options": ["trim", "lowercase", "truncate(3)"],
      "variants": ["Get", "Post", "Delete"]
    }
  ]
}
```

A variant written as a plain string is a unit variant. A variant may also be
written as an object with `fields` listing the types of its payload; such
variants are accepted by the document model so that they can be reported
with a precise location, but code can't be generated for them.
"""

from __future__ import annotations

import keyword
import logging
import unicodedata
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .exceptions import SchemaError, VariantDataError

__all__ = [
    "Variant",
    "EnumDeclaration",
    "SchemaDocument",
    "load_schema",
    "validate_unit_variants",
]

_LOGGER = logging.getLogger(__name__)

UNSUPPORTED_DATA_MESSAGE = "enumparse: variants with data are not supported"

# Member names rejected by enum.Enum itself
_INVALID_MEMBER_NAMES = frozenset({"mro"})


def _validate_identifier(value: str) -> str:
    """Verify the name can be used as a python identifier in generated code."""
    if not value.isidentifier() or keyword.iskeyword(value):
        raise ValueError(f"'{value}' is not a valid identifier")
    if value.startswith("_"):
        raise ValueError(f"'{value}' must not start with an underscore")
    if unicodedata.normalize("NFKC", value) != value:
        raise ValueError(f"'{value}' is not in NFKC normal form")
    return value


class Variant(BaseModel):
    """A single case of an enumeration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str

    payload: list[str] = Field(alias="fields", default_factory=list)
    """Types of the associated data carried by the variant, if any."""

    @model_validator(mode="before")
    @classmethod
    def parse_shorthand(cls, data: Any) -> Any:
        """Accept a plain string as a unit variant."""
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Verify the variant name is a usable identifier."""
        if value in _INVALID_MEMBER_NAMES:
            raise ValueError(f"'{value}' can't be used as an enum member name")
        return _validate_identifier(value)

    @property
    def is_unit(self) -> bool:
        """Return true if the variant carries no data."""
        return not self.payload


class EnumDeclaration(BaseModel):
    """An enumeration along with the options used to generate its parser."""

    model_config = ConfigDict(frozen=True)

    name: str

    variants: list[Variant] = Field(default_factory=list)
    """Variants in declaration order, which also determines matching order."""

    options: list[str] = Field(default_factory=list)
    """Option directives such as `trim`, `lowercase` or `truncate(3)`."""

    doc: str | None = None
    """Docstring for the generated enumeration."""

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Verify the enumeration name is a usable identifier."""
        return _validate_identifier(value)

    @field_validator("options", mode="before")
    @classmethod
    def parse_options_string(cls, value: Any) -> Any:
        """Accept a single string of comma separated directives."""
        if isinstance(value, str):
            return [value]
        return value

    @model_validator(mode="after")
    def verify_unique_variants(self) -> EnumDeclaration:
        """Verify that no two variants share a name.

        Python identifiers are compared in NFKC normal form.
        """
        seen: set[str] = set()
        for variant in self.variants:
            key = unicodedata.normalize("NFKC", variant.name)
            if key in seen:
                raise ValueError(
                    f"Duplicate variant '{variant.name}' in enum '{self.name}'"
                )
            seen.add(key)
        return self

    @property
    def variant_names(self) -> list[str]:
        """Return the variant identifiers in declaration order."""
        return [variant.name for variant in self.variants]


class SchemaDocument(BaseModel):
    """A collection of enumeration declarations generated into one module."""

    enums: list[EnumDeclaration] = Field(default_factory=list)

    doc: str | None = None
    """Docstring for the generated module."""


def load_schema(content: str) -> SchemaDocument:
    """Load a schema document from JSON content.

    Will raise a SchemaError on failure.
    """
    try:
        document = SchemaDocument.model_validate_json(content)
    except ValidationError as err:
        raise SchemaError(
            "Invalid schema document", detailed_error=str(err)
        ) from err
    _LOGGER.debug("Loaded schema with %d enum(s)", len(document.enums))
    return document


def validate_unit_variants(declaration: EnumDeclaration) -> None:
    """Verify that every variant of the enumeration is a unit variant.

    Will raise a VariantDataError located at the first variant carrying data.
    """
    for variant in declaration.variants:
        if variant.is_unit:
            continue
        raise VariantDataError(
            UNSUPPORTED_DATA_MESSAGE,
            location=f"{declaration.name}.{variant.name}",
            detailed_error=f"{variant.name}({', '.join(variant.payload)})",
        )
