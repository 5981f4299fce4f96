"""Base classes for configuration models.

Kept in a separate module so that config.py and log.py can both
depend on them without importing each other.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Closeable(Protocol):
    """Anything with a close() method."""

    def close(self) -> None:
        ...


class BaseCloseable(BaseModel):
    """Pydantic model that closes its Closeable fields.

    Subclasses become context managers. close() walks every model
    field and closes the ones implementing Closeable, so closing a
    Config closes its Logger, which closes its sinks.
    """

    def close(self):
        """Close every Closeable child, reporting failures to stderr."""
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None:
                continue

            if isinstance(child, Closeable):
                try:
                    child.close()
                except Exception as e:
                    print(
                        f"Warning: Error closing {field_name}: {e}",
                        file=sys.stderr,
                    )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        self.close()
        return False


class BaseConfig(BaseCloseable):
    """Marker base for configuration sections (YAML/env/CLI)."""
    pass


__all__ = ["Closeable", "BaseCloseable", "BaseConfig"]
