"""Load generated source as a module without writing it to disk.

This is useful when the parsers are built once at startup from a schema
that ships with an application, rather than generated ahead of time:

```python
from enumparse import derive, loader
from enumparse.schema import EnumDeclaration

declaration = EnumDeclaration(name="Color", variants=["Red", "Green"], options=["lowercase"])
colors = loader.load_module(loader.module_source(derive(declaration)), "colors")
print(colors.parse_color("RED"))
```
"""

from __future__ import annotations

import importlib.abc
import importlib.util
import logging
import types

from .codegen import GeneratedEnum, generate_module, render_module
from .schema import SchemaDocument

__all__ = [
    "GeneratedSourceLoader",
    "module_source",
    "load_module",
    "load_document",
]

_LOGGER = logging.getLogger(__name__)


def module_source(generated: GeneratedEnum) -> str:
    """Return the source of a module holding a single generated enumeration."""
    return render_module([generated])


class GeneratedSourceLoader(importlib.abc.InspectLoader):
    """Loader for a module whose source is held in memory."""

    def __init__(self, name: str, source: str) -> None:
        self.name = name
        self.source = source

    @property
    def filename(self) -> str:
        """Return the name shown for the source in tracebacks."""
        return f"<enumparse:{self.name}>"

    def get_source(self, fullname: str) -> str:
        return self.source

    def get_code(self, fullname: str) -> types.CodeType:
        return self.source_to_code(self.source, self.filename)

    def is_package(self, fullname: str) -> bool:
        return False


def load_module(source: str, name: str) -> types.ModuleType:
    """Create a new module from generated source using the import machinery.

    The module is not added to `sys.modules`.
    """
    _LOGGER.debug("Loading generated module %s", name)
    loader = GeneratedSourceLoader(name, source)
    spec = importlib.util.spec_from_loader(name, loader, origin=loader.filename)
    if spec is None:
        raise ImportError(f"Unable to create a module spec for {name}")
    module = importlib.util.module_from_spec(spec)
    loader.exec_module(module)
    return module


def load_document(document: SchemaDocument, name: str) -> types.ModuleType:
    """Generate and load a module for every enumeration in the document."""
    return load_module(generate_module(document), name)
