"""
models/value.py
---------------
Tagged scalar value passed between the JSON front end and the store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

Native = Optional[Union[int, float, bool, str]]


class ValueKind(Enum):
    NULL = "null"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass(frozen=True)
class Value:
    """
    A single column value.

    Attributes:
        kind: Which of the five variants this value is.
        native: The Python payload (None for NULL).
    """
    kind: ValueKind
    native: Native = None

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL)

    @classmethod
    def integer(cls, v: int) -> "Value":
        return cls(ValueKind.INTEGER, int(v))

    @classmethod
    def floating(cls, v: float) -> "Value":
        return cls(ValueKind.FLOAT, float(v))

    @classmethod
    def boolean(cls, v: bool) -> "Value":
        return cls(ValueKind.BOOLEAN, bool(v))

    @classmethod
    def text(cls, v: str) -> "Value":
        return cls(ValueKind.TEXT, str(v))

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL
