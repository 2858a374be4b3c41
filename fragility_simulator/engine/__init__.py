"""Engine sub-package — entity state and fragility scoring."""

from fragility_simulator.engine.entity_state import (
    EntityState,
    capital_adequacy_ratio,
    is_adequately_capitalized,
    leverage_ratio,
)
from fragility_simulator.engine.scoring import compute_fragility, risk_band

__all__ = [
    "EntityState",
    "capital_adequacy_ratio",
    "is_adequately_capitalized",
    "leverage_ratio",
    "compute_fragility",
    "risk_band",
]
