"""Compatibility switches for generating code from lenient declarations.

By default, a declaration where two variants have the same truncated alias
is rejected since the input would be ambiguous. Existing declarations may
rely on the earlier variant winning instead, which is allowed inside the
context manager below:

```python
from enumparse import compat, derive

with compat.enable_first_match_aliases():
    generated = derive(declaration)
```
"""

from collections.abc import Generator
import contextlib
import contextvars

__all__ = [
    "enable_first_match_aliases",
    "is_first_match_aliases_enabled",
]

_first_match_aliases = contextvars.ContextVar("first_match_aliases", default=False)


@contextlib.contextmanager
def enable_first_match_aliases() -> Generator[None]:
    """Context manager to let the first variant win an ambiguous alias."""
    token = _first_match_aliases.set(True)
    try:
        yield
    finally:
        _first_match_aliases.reset(token)


def is_first_match_aliases_enabled() -> bool:
    """Check if ambiguous aliases resolve to the first variant."""
    return _first_match_aliases.get()
