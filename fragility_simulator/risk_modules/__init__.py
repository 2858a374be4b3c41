"""Risk modules sub-package — inputs precomputed ahead of a simulation."""

from fragility_simulator.risk_modules.entropy import (
    Position,
    calculate_entropy,
    normalized_entropy,
    concentration_risk,
    positions_from_weights,
)

__all__ = [
    "Position",
    "calculate_entropy",
    "normalized_entropy",
    "concentration_risk",
    "positions_from_weights",
]
