"""
db/errors.py
------------
Failure taxonomy for the data-access layer.

Every failure raised by the core is a DataAccessError carrying a short
`kind` tag and a human-readable message, so the request layer can map
failures to responses without inspecting driver exceptions.
"""


class DataAccessError(Exception):
    """Base class for all data-access failures."""

    kind: str = "data_access_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"


class InvalidIdentifier(DataAccessError, ValueError):
    """A table or column name is outside the allowed grammar."""

    kind = "invalid_identifier"


class InvalidOrderBy(DataAccessError, ValueError):
    """An ORDER BY clause does not match `ident [ASC|DESC], ...`."""

    kind = "invalid_order_by"


class MissingParameter(DataAccessError, ValueError):
    """A condition has more `?` placeholders than supplied values."""

    kind = "missing_parameter"


class UnsupportedValue(DataAccessError, ValueError):
    """A value cannot be represented as Null/Integer/Float/Boolean/Text."""

    kind = "unsupported_value"


class StoreConnectionError(DataAccessError, ConnectionError):
    """Connecting to, or executing against, the store failed."""

    kind = "connection_error"


class PoolExhausted(DataAccessError, TimeoutError):
    """No connection became available before the acquire timeout."""

    kind = "pool_exhausted"
