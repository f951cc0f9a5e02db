"""Typed errors for market reads and override commands."""

from __future__ import annotations


class MarketValidationError(ValueError):
    """Raised when a market id or override value is malformed.

    Raised before any store access is attempted.

    Attributes:
        field: Name of the offending input (e.g. "market_id", "suspended").
        value: The rejected value as received.
    """

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")


class MarketStoreError(Exception):
    """Raised when the market store fails to execute a read or write.

    The underlying driver/ORM error is chained as ``__cause__``.

    Attributes:
        operation: Name of the engine operation that failed.
        market_id: Target market id for single-row operations, else None.
    """

    def __init__(self, operation: str, market_id: int | None = None) -> None:
        self.operation = operation
        self.market_id = market_id
        target = f" market_id={market_id}" if market_id is not None else ""
        super().__init__(f"Market store failure during {operation}{target}")


def validate_market_id(market_id: object) -> int:
    # bool is an int subclass; True must not address market 1.
    if isinstance(market_id, bool) or not isinstance(market_id, int):
        raise MarketValidationError("market_id", market_id, "must be an integer")
    if market_id <= 0:
        raise MarketValidationError("market_id", market_id, "must be positive")
    return market_id


def validate_suspended_flag(suspended: object) -> bool:
    if not isinstance(suspended, bool):
        raise MarketValidationError("suspended", suspended, "must be a boolean")
    return suspended
