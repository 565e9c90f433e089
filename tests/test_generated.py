"""Tests for the behavior of generated parse functions."""

from collections.abc import Callable
import enum
import types

import pytest
from pydantic import BaseModel, ValidationError, field_validator

from enumparse.match_table import primary_pattern
from enumparse.options import parse_options
from enumparse.transform import Normalization

LoadEnum = Callable[..., types.ModuleType]


def test_no_options(load_enum: LoadEnum) -> None:
    """Test that only the exact variant name is accepted."""
    module = load_enum("Color", ["Red", "Green"])
    assert module.parse_color("Red") is module.Color.Red
    assert module.parse_color("Green") is module.Color.Green

    for value in ["red", "RED", " Red", "Red ", "Re", "", "Blue"]:
        with pytest.raises(module.ParseColorError) as exc_info:
            module.parse_color(value)
        assert exc_info.value.value == value


def test_lowercase(load_enum: LoadEnum) -> None:
    """Test that any casing of a variant name is accepted."""
    module = load_enum("Color", ["Red", "Green"], ["lowercase"])
    for value in ["RED", "red", "Red", "rEd"]:
        assert module.parse_color(value) is module.Color.Red
    assert module.parse_color("GREEN") is module.Color.Green
    with pytest.raises(module.ParseColorError):
        module.parse_color(" red")


def test_trim(load_enum: LoadEnum) -> None:
    """Test that surrounding whitespace is ignored for matching."""
    module = load_enum("Color", ["Red", "Green"], ["trim"])
    assert module.parse_color("  Red  ") is module.Color.Red
    assert module.parse_color("\tGreen\n") is module.Color.Green
    with pytest.raises(module.ParseColorError):
        module.parse_color(" red ")


def test_trim_error_keeps_original(load_enum: LoadEnum) -> None:
    """Test that the error carries the input before normalization."""
    module = load_enum("Color", ["Red", "Green"], ["trim", "lowercase"])
    with pytest.raises(module.ParseColorError) as exc_info:
        module.parse_color("  red!  ")
    assert exc_info.value == module.ParseColorError("  red!  ")
    assert exc_info.value.value == "  red!  "
    assert str(exc_info.value) == "Unknown variant:   red!  "


def test_trim_then_lowercase(load_enum: LoadEnum) -> None:
    """Test that trimming and lowercasing are combined."""
    module = load_enum("Color", ["Red", "Green"], ["trim, lowercase"])
    assert module.parse_color("  RED  ") is module.Color.Red
    assert module.parse_color("\n green\t") is module.Color.Green


def test_truncate(load_enum: LoadEnum) -> None:
    """Test that truncated aliases are accepted."""
    module = load_enum("Method", ["Get", "Post"], ["truncate(2)"])
    assert module.parse_method("Ge") is module.Method.Get
    assert module.parse_method("Po") is module.Method.Post
    assert module.parse_method("Get") is module.Method.Get
    assert module.parse_method("Post") is module.Method.Post
    for value in ["xx", "G", "Pos", "ge", "Gett"]:
        with pytest.raises(module.ParseMethodError) as exc_info:
            module.parse_method(value)
        assert exc_info.value == module.ParseMethodError(value)


def test_truncate_short_names(load_enum: LoadEnum) -> None:
    """Test that names no longer than N have no alias."""
    module = load_enum("Method", ["Get", "Put", "Delete"], ["truncate(3), lowercase"])
    assert module.parse_method("del") is module.Method.Delete
    assert module.parse_method("DEL") is module.Method.Delete
    assert module.parse_method("get") is module.Method.Get
    with pytest.raises(module.ParseMethodError):
        module.parse_method("ge")


def test_full_name_precedes_alias(load_enum: LoadEnum) -> None:
    """Test that a full name wins over an equal alias of another variant."""
    module = load_enum("Words", ["Get", "Ge"], ["truncate(2)"])
    assert module.parse_words("Ge") is module.Words.Ge
    assert module.parse_words("Get") is module.Words.Get


def test_non_ascii_truncate(load_enum: LoadEnum) -> None:
    """Test truncating names with non-ascii characters."""
    module = load_enum("Mood", ["Ärger", "Öde"], ["truncate(2), lowercase"])
    assert module.parse_mood("är") is module.Mood.Ärger
    assert module.parse_mood("ÄR") is module.Mood.Ärger
    assert module.parse_mood("öd") is module.Mood.Öde


def test_empty_enum(load_enum: LoadEnum) -> None:
    """Test that every string fails to parse an enumeration without variants."""
    module = load_enum("Never", [], ["trim, lowercase"])
    assert list(module.Never) == []
    with pytest.raises(module.ParseNeverError) as exc_info:
        module.parse_never(" anything ")
    assert exc_info.value.value == " anything "


@pytest.mark.parametrize(
    "options",
    [
        [],
        ["trim"],
        ["lowercase"],
        ["trim", "lowercase"],
        ["truncate(1)"],
        ["lowercase, truncate(4)"],
    ],
)
def test_round_trip(load_enum: LoadEnum, options: list[str]) -> None:
    """Test that every variant parses from its own name."""
    variants = ["Alpha", "Beta", "Gamma", "Delta"]
    module = load_enum("Letter", variants, options)
    config = parse_options(options)
    normalization = Normalization.from_config(config)
    for member in module.Letter:
        assert module.parse_letter(member.name) is member
        name = normalization.apply(primary_pattern(member.name, config))
        assert module.parse_letter(name) is member


def test_generated_enum(load_enum: LoadEnum) -> None:
    """Test the generated enumeration type."""
    module = load_enum("Color", ["Red", "Green"])
    assert issubclass(module.Color, enum.Enum)
    assert [member.name for member in module.Color] == ["Red", "Green"]
    assert module.Color.Red.value == "Red"
    assert module.__all__ == ["Color", "ParseColorError", "parse_color"]


def test_error_type(load_enum: LoadEnum) -> None:
    """Test the error type composes with other error handling."""
    module = load_enum("Color", ["Red"])
    error = module.ParseColorError("Blue")
    assert isinstance(error, ValueError)
    assert str(error) == "Unknown variant: Blue"
    assert error == module.ParseColorError("Blue")
    assert error != module.ParseColorError("blue")
    assert hash(error) == hash(module.ParseColorError("Blue"))
    assert repr(error) == "ParseColorError('Blue')"

    with pytest.raises(ValueError, match="Unknown variant: Blue"):
        module.parse_color("Blue")


def test_pydantic_validator(load_enum: LoadEnum) -> None:
    """Test using a generated parse function as a pydantic validator."""
    module = load_enum("Color", ["Red", "Green"], ["trim, lowercase"])

    class Paint(BaseModel):
        """Model with a parsed color."""

        color: module.Color  # type: ignore[name-defined]

        @field_validator("color", mode="before")
        @classmethod
        def parse_color(cls, value: str) -> module.Color:  # type: ignore[name-defined]
            return module.parse_color(value)

    assert Paint(color=" GREEN ").color is module.Color.Green
    with pytest.raises(ValidationError, match="Unknown variant: blue"):
        Paint(color="blue")


def test_name_close_to_builtin(load_enum: LoadEnum) -> None:
    """Test an enumeration named like a builtin with different case."""
    module = load_enum("Super", ["Red"])
    assert module.parse_super("Red") is module.Super.Red
    with pytest.raises(module.ParseSuperError):
        module.parse_super("Blue")
