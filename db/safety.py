"""
db/safety.py
------------
Input sanitization for everything that ends up inside SQL text.

Responsibilities:
    - Validate table/column identifiers and ORDER BY clauses.
    - Convert JSON-decoded values into tagged Values.
    - Render Values as escaped inline literals.
    - Substitute `?` placeholders in mutation conditions with literals,
      since ALTER TABLE ... UPDATE/DELETE accepts no bound parameters.
"""

import json
import re
from typing import Any, Sequence

from db.errors import InvalidIdentifier, InvalidOrderBy, MissingParameter, UnsupportedValue
from models.value import Value, ValueKind
from utils.logger import get_logger

logger = get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+")
_ORDER_TERM_RE = re.compile(r"[A-Za-z0-9_]+(\s+(ASC|DESC))?", re.IGNORECASE)
_PLACEHOLDER_RE = re.compile(r"\?")

WILDCARD = "*"


# ── IDENTIFIERS ───────────────────────────────────────────

def validate_identifier(name: str) -> str:
    """
    Ensure `name` consists only of letters, digits and underscores.

    Returns:
        The name unchanged, so calls can be used inline.

    Raises:
        InvalidIdentifier: If the name is empty or has any other character.
    """
    if not isinstance(name, str) or not _IDENTIFIER_RE.fullmatch(name):
        raise InvalidIdentifier(f"Invalid identifier: {name!r}")
    return name


def is_valid_order_by(order_by: str) -> bool:
    """Check `col [ASC|DESC], col [ASC|DESC], ...` (direction is case-insensitive)."""
    parts = [p.strip() for p in order_by.split(",")]
    return all(_ORDER_TERM_RE.fullmatch(p) for p in parts)


def validate_order_by(order_by: str) -> str:
    if not isinstance(order_by, str) or not is_valid_order_by(order_by):
        raise InvalidOrderBy(f"Invalid orderBy clause: {order_by!r}")
    return order_by


# ── VALUES ────────────────────────────────────────────────

def convert_value(raw: Any, strict: bool = False) -> Value:
    """
    Map a JSON-decoded element to a tagged Value.

    Strings stay Text. Other primitives are tried as Integer, then Float,
    then Boolean. Arrays and objects fall back to Text holding their compact
    JSON form, unless `strict` is set.

    Args:
        raw: Output of `json.loads` (None, bool, int, float, str, list, dict)
            or an already converted Value.
        strict: Reject arrays and objects instead of stringifying them.

    Raises:
        UnsupportedValue: For non-JSON Python objects, or nested JSON when strict.
    """
    if isinstance(raw, Value):
        return raw
    if raw is None:
        return Value.null()
    if isinstance(raw, str):
        return Value.text(raw)
    # bool is a subclass of int and must be matched first
    if isinstance(raw, bool):
        return Value.boolean(raw)
    if isinstance(raw, int):
        return Value.integer(raw)
    if isinstance(raw, float):
        return Value.floating(raw)
    if isinstance(raw, (list, dict)):
        if strict:
            raise UnsupportedValue(f"Unsupported JSON element: {_compact_json(raw)}")
        return Value.text(_compact_json(raw))
    raise UnsupportedValue(f"Unsupported value of type {type(raw).__name__}: {raw!r}")


def _compact_json(raw: Any) -> str:
    try:
        return json.dumps(raw, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise UnsupportedValue(f"Value is not JSON serializable: {e}") from e


def quote_text(s: str) -> str:
    """Single-quote `s`, doubling embedded quotes and backslashes."""
    return "'" + s.replace("\\", "\\\\").replace("'", "''") + "'"


def literal_of(value: Any) -> str:
    """
    Render a Value as inline SQL text.

    Null -> NULL, Integer/Float -> numeric text, Boolean -> 1/0,
    Text -> quoted and escaped. Anything that is not a Value is
    stringified and quoted the same way as Text.
    """
    if not isinstance(value, Value):
        return quote_text(str(value))

    kind = value.kind
    if kind is ValueKind.NULL:
        return "NULL"
    if kind is ValueKind.BOOLEAN:
        return "1" if value.native else "0"
    if kind is ValueKind.INTEGER:
        return str(value.native)
    if kind is ValueKind.FLOAT:
        return repr(value.native)
    if kind is ValueKind.TEXT:
        return quote_text(value.native)
    raise UnsupportedValue(f"Unknown value kind: {kind}")


# ── MUTATION CONDITIONS ───────────────────────────────────

def substitute_placeholders(condition: str, params: Sequence[Any]) -> str:
    """
    Replace each `?` in `condition`, left to right, with the literal of the
    matching parameter.

    Parameters are converted with `convert_value` first, so a JSON string
    "1" becomes the text literal '1'. Surplus parameters are ignored.

    Raises:
        MissingParameter: If there are more placeholders than parameters.
    """
    values = [convert_value(p) for p in params]
    index = 0

    def _next_literal(_match: re.Match) -> str:
        nonlocal index
        if index >= len(values):
            raise MissingParameter(
                f"Not enough parameters for condition: {condition!r} "
                f"({len(values)} supplied)"
            )
        literal = literal_of(values[index])
        index += 1
        return literal

    substituted = _PLACEHOLDER_RE.sub(_next_literal, condition)
    if index < len(values):
        logger.debug(f"Ignored {len(values) - index} surplus condition parameter(s)")
    return substituted
