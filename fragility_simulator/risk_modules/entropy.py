"""
Portfolio Entropy — Concentration Risk
======================================
Implements:
  - Shannon entropy of portfolio weights, H = -Σ p_i log2(p_i)
  - Normalized entropy H / log2(N)
  - Concentration risk 1 - H / log2(N)

The result feeds ``EntityState.entropy_index`` before a simulation starts.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence

from fragility_simulator.config import EntropyConfig, require_finite


@dataclass
class Position:
    """Single portfolio position."""
    asset: str
    weight: float


def _weights(positions: Sequence[Position], config: EntropyConfig) -> np.ndarray:
    w = np.array([require_finite(f"weight of {p.asset}", p.weight) for p in positions], dtype=float)
    w = w[w >= config.min_weight]
    if w.size == 0:
        return w
    if config.normalize:
        total = w.sum()
        if total < 1e-10:
            return np.empty(0)
        w = w / total
    return w[w > 0]


def calculate_entropy(
    positions: Sequence[Position], config: Optional[EntropyConfig] = None
) -> float:
    """Shannon entropy of the position weights, in bits."""
    config = config or EntropyConfig()
    w = _weights(positions, config)
    if w.size == 0:
        return 0.0
    return float(-(w * np.log2(w)).sum())


def normalized_entropy(
    positions: Sequence[Position], config: Optional[EntropyConfig] = None
) -> float:
    """Entropy divided by the maximum log2(N); 0.0 for one position or fewer."""
    n = len(positions)
    if n <= 1:
        return 0.0
    return calculate_entropy(positions, config) / np.log2(n)


def concentration_risk(
    positions: Sequence[Position], config: Optional[EntropyConfig] = None
) -> float:
    """Value in [0, 1] where 1 = fully concentrated."""
    return 1.0 - normalized_entropy(positions, config)


def positions_from_weights(weights: Sequence[float]) -> list:
    """Label bare weights as Asset1, Asset2, ..."""
    return [Position(asset=f"Asset{i + 1}", weight=w) for i, w in enumerate(weights)]
