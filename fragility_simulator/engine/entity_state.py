"""
Entity State
============
Immutable balance-sheet snapshot scored by the fragility engine.

The canonical representation carries the regulatory metrics the score
depends on (Tier 1 capital, total assets, LCR, diversification index).
Leverage-style inputs (assets / liabilities / equity) are accepted through
``EntityState.from_balance_sheet`` and mapped onto the same fields.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict

from fragility_simulator.config import (
    REGULATORY_MIN_CAPITAL,
    require_non_negative,
)
from fragility_simulator.errors import InvalidInputError


# ═══════════════════════════════════════════════════════════════════════════════
#  Entity State (one point in time)
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EntityState:
    """Immutable snapshot of the entity's regulatory metrics."""
    tier1_capital: float           # CET1 + AT1 capital (loss-absorbing buffer)
    total_assets: float            # Total (risk-weighted) assets
    liquidity_coverage: float      # Liquidity Coverage Ratio, 1.0 = 100 %
    entropy_index: float = 0.0     # Diversification index, precomputed upstream

    def __post_init__(self):
        for name in ("tier1_capital", "total_assets",
                     "liquidity_coverage", "entropy_index"):
            object.__setattr__(
                self, name, require_non_negative(name, getattr(self, name))
            )

    # ── Alternate front-end ──────────────────────────────────────────────

    @classmethod
    def from_balance_sheet(
        cls,
        assets: float,
        liabilities: float,
        equity: float,
        liquidity_coverage: float = 1.0,
        entropy_index: float = 0.0,
    ) -> "EntityState":
        """
        Build a state from leverage-style balance-sheet fields.

        Equity is taken as the Tier 1 buffer. The identity
        assets = liabilities + equity is not enforced, but all three
        figures must be finite and non-negative.
        """
        require_non_negative("liabilities", liabilities)
        return cls(
            tier1_capital=equity,
            total_assets=assets,
            liquidity_coverage=liquidity_coverage,
            entropy_index=entropy_index,
        )

    # ── Derived properties ───────────────────────────────────────────────

    @property
    def capital_ratio(self) -> float:
        if self.total_assets <= 0:
            return 0.0
        return self.tier1_capital / self.total_assets

    def constraint_distance(self, min_ratio: float = REGULATORY_MIN_CAPITAL) -> float:
        """Capital in excess of the regulatory minimum (negative = breach)."""
        return self.tier1_capital - self.total_assets * min_ratio

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


# ═══════════════════════════════════════════════════════════════════════════════
#  Capital adequacy helpers
# ═══════════════════════════════════════════════════════════════════════════════

def capital_adequacy_ratio(state: EntityState) -> float:
    """
    CAR = Tier 1 Capital / Risk-Weighted Assets

    Basel III minimum: 8 %, well-capitalised threshold: 10 %.
    """
    return state.capital_ratio


def is_adequately_capitalized(
    state: EntityState, min_ratio: float = REGULATORY_MIN_CAPITAL
) -> bool:
    return capital_adequacy_ratio(state) >= min_ratio


def leverage_ratio(liabilities: float, equity: float) -> float:
    """Liabilities per unit of equity (x). Zero equity is infinite leverage."""
    liabilities = require_non_negative("liabilities", liabilities)
    equity = require_non_negative("equity", equity)
    if equity == 0:
        if liabilities == 0:
            raise InvalidInputError("leverage is undefined for an empty balance sheet")
        return float("inf")
    return liabilities / equity
