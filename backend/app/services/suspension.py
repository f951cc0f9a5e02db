"""Effective suspension state for a market.

The precedence lives in one ordered rule table. Each rule carries a Python
form (used when a market is enriched in memory) and a SQL form (used to build
the CASE expression the market query filters on), so both read paths resolve
identically.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple

from sqlalchemy import Boolean, String, and_, case, false, literal, or_, true, type_coerce
from sqlalchemy.sql.elements import ColumnElement

from app.models.alternate import Alternate
from app.models.market import Market

# Inclusive: a probability of exactly 0.4 counts as low confidence.
LOW_CONFIDENCE_MAX_PROBABILITY = 0.4


class SuspensionReason(StrEnum):
    MANUAL_OVERRIDE = "manual_override"
    FEED_SUSPENDED = "feed_suspended"
    MISSING_PRICING = "missing_pricing"
    LOW_CONFIDENCE = "low_confidence"
    PRICED = "priced"


@dataclass(frozen=True, slots=True)
class SuspensionInputs:
    manual_suspension: bool | None
    market_suspended: bool
    under_odds: float | None
    over_odds: float | None
    push_odds: float | None

    @property
    def odds(self) -> tuple[float | None, float | None, float | None]:
        return (self.under_odds, self.over_odds, self.push_odds)

    @classmethod
    def from_market(cls, market: Market, alternate: Alternate | None) -> "SuspensionInputs":
        """Build inputs from a market and the alternate at its optimal line, if any."""
        return cls(
            manual_suspension=market.manual_suspension,
            market_suspended=bool(market.market_suspended),
            under_odds=alternate.under_odds if alternate is not None else None,
            over_odds=alternate.over_odds if alternate is not None else None,
            push_odds=alternate.push_odds if alternate is not None else None,
        )


class SuspensionColumns(NamedTuple):
    """SQL expressions standing in for each SuspensionInputs field."""

    manual_suspension: ColumnElement[Any]
    market_suspended: ColumnElement[Any]
    under_odds: ColumnElement[Any]
    over_odds: ColumnElement[Any]
    push_odds: ColumnElement[Any]

    @property
    def odds(self) -> tuple[ColumnElement[Any], ColumnElement[Any], ColumnElement[Any]]:
        return (self.under_odds, self.over_odds, self.push_odds)


@dataclass(frozen=True, slots=True)
class SuspensionDecision:
    is_suspended: bool
    reason: SuspensionReason


@dataclass(frozen=True)
class SuspensionRule:
    reason: SuspensionReason
    matches: Callable[[SuspensionInputs], bool]
    outcome: Callable[[SuspensionInputs], bool]
    matches_sql: Callable[[SuspensionColumns], ColumnElement[bool]]
    outcome_sql: Callable[[SuspensionColumns], ColumnElement[Any]]


SUSPENSION_RULES: tuple[SuspensionRule, ...] = (
    SuspensionRule(
        reason=SuspensionReason.MANUAL_OVERRIDE,
        matches=lambda v: v.manual_suspension is not None,
        outcome=lambda v: bool(v.manual_suspension),
        matches_sql=lambda c: c.manual_suspension.is_not(None),
        outcome_sql=lambda c: c.manual_suspension,
    ),
    SuspensionRule(
        reason=SuspensionReason.FEED_SUSPENDED,
        matches=lambda v: bool(v.market_suspended),
        outcome=lambda v: True,
        matches_sql=lambda c: c.market_suspended == true(),
        outcome_sql=lambda c: true(),
    ),
    SuspensionRule(
        # Also covers "no alternate at the optimal line": the outer join leaves all three NULL.
        reason=SuspensionReason.MISSING_PRICING,
        matches=lambda v: any(p is None for p in v.odds),
        outcome=lambda v: True,
        matches_sql=lambda c: or_(*(col.is_(None) for col in c.odds)),
        outcome_sql=lambda c: true(),
    ),
    SuspensionRule(
        reason=SuspensionReason.LOW_CONFIDENCE,
        matches=lambda v: all(p <= LOW_CONFIDENCE_MAX_PROBABILITY for p in v.odds),
        outcome=lambda v: True,
        matches_sql=lambda c: and_(*(col <= LOW_CONFIDENCE_MAX_PROBABILITY for col in c.odds)),
        outcome_sql=lambda c: true(),
    ),
)

DEFAULT_DECISION = SuspensionDecision(is_suspended=False, reason=SuspensionReason.PRICED)


def resolve_suspension(inputs: SuspensionInputs) -> SuspensionDecision:
    """Apply SUSPENSION_RULES in order; the first matching rule decides."""
    for rule in SUSPENSION_RULES:
        if rule.matches(inputs):
            return SuspensionDecision(is_suspended=rule.outcome(inputs), reason=rule.reason)
    return DEFAULT_DECISION


def suspension_case(columns: SuspensionColumns) -> ColumnElement[bool]:
    """SQL CASE equivalent of ``resolve_suspension(...).is_suspended``."""
    whens = [(rule.matches_sql(columns), rule.outcome_sql(columns)) for rule in SUSPENSION_RULES]
    return type_coerce(case(*whens, else_=false()), Boolean)


def suspension_reason_case(columns: SuspensionColumns) -> ColumnElement[str]:
    """SQL CASE equivalent of ``resolve_suspension(...).reason``."""
    whens = [
        (rule.matches_sql(columns), literal(rule.reason.value, String))
        for rule in SUSPENSION_RULES
    ]
    return case(*whens, else_=literal(DEFAULT_DECISION.reason.value, String))
