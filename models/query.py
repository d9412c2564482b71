"""
models/query.py
---------------
Plain data holders for built statements, mutation conditions and result rows.
"""

from dataclasses import dataclass, field
from typing import Any

# One result row: column name -> value, in the result's physical column order.
Record = dict[str, Any]


@dataclass(frozen=True)
class Statement:
    """
    SQL text plus the values bound to its `%s` placeholders.

    Attributes:
        sql: Statement text in the store's dialect.
        params: Positional bound parameters (empty for raw statements).
    """
    sql: str
    params: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Condition:
    """
    Predicate text with `?` placeholders and the values that fill them, in order.

    Placeholders are replaced by inline literals because the store's
    mutation statements accept no bound parameters.
    """
    text: str
    params: list[Any] = field(default_factory=list)
