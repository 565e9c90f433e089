"""Test fixtures."""

from collections.abc import Callable
import types

import pytest

from enumparse.codegen import derive
from enumparse.loader import load_module, module_source
from enumparse.schema import EnumDeclaration


@pytest.fixture(name="load_enum")
def mock_load_enum() -> Callable[..., types.ModuleType]:
    """Fixture that generates and loads a parser for a declaration."""

    def load(name: str, variants: list[str], options: list[str] | None = None) -> types.ModuleType:
        declaration = EnumDeclaration(
            name=name, variants=variants, options=options or []
        )
        return load_module(module_source(derive(declaration)), f"generated_{name}")

    return load
