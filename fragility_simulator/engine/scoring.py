"""
Fragility Score
===============
Closed-form fragility score of an entity state:

    raw   = lambda(g) + entropy_penalty + liquidity_stress
    score = 100 * raw / (raw + k)

where g = Tier 1 capital - regulatory minimum * assets is the capital
constraint distance and lambda(g) is an exponential barrier that
saturates once the constraint is breached. The result is bounded in
[0, 100]:
  - 0-30  : low fragility (well-capitalised)
  - 30-70 : medium fragility (stressed)
  - 70-100: high fragility (near-insolvency)
"""

from __future__ import annotations

import math

from fragility_simulator.config import (
    ScoringConfig,
    SATURATION_LAMBDA,
    ENTROPY_WEIGHT,
    LIQUIDITY_WEIGHT,
    MAX_LIQUIDITY_STRESS,
    NORMALIZATION_SHIFT,
    SCORE_FLOOR,
    SCORE_CEILING,
    LOW_RISK_CEILING,
    HIGH_RISK_FLOOR,
)
from fragility_simulator.engine.entity_state import EntityState


def barrier_multiplier(constraint_distance: float, sensitivity: float) -> float:
    """Shadow price of the capital constraint."""
    if constraint_distance <= 0.0:
        return SATURATION_LAMBDA
    return sensitivity * math.exp(-constraint_distance)


def liquidity_stress(liquidity_coverage: float) -> float:
    if liquidity_coverage <= 0.0:
        return MAX_LIQUIDITY_STRESS
    return min(LIQUIDITY_WEIGHT / liquidity_coverage, MAX_LIQUIDITY_STRESS)


def compute_fragility(state: EntityState, config: ScoringConfig) -> float:
    """
    Compute the fragility score of ``state``.

    Pure and total: every valid state maps to a float in [0, 100].
    """
    # 1. Capital constraint distance g(x)
    distance = state.tier1_capital - state.total_assets * config.regulatory_min_capital

    # 2. Barrier term, saturating at insolvency
    lam = barrier_multiplier(distance, config.lambda_sensitivity)

    # 3. Concentration penalty
    entropy_penalty = state.entropy_index * ENTROPY_WEIGHT

    # 4. Liquidity stress
    liq = liquidity_stress(state.liquidity_coverage)

    raw_score = lam + entropy_penalty + liq
    if math.isinf(raw_score):
        return SCORE_CEILING
    normalized = 100.0 * (raw_score / (raw_score + NORMALIZATION_SHIFT))
    return max(SCORE_FLOOR, min(SCORE_CEILING, normalized))


def risk_band(score: float) -> str:
    """Classify a fragility score as LOW / MEDIUM / HIGH."""
    if score > HIGH_RISK_FLOOR:
        return "HIGH"
    if score > LOW_RISK_CEILING:
        return "MEDIUM"
    return "LOW"
