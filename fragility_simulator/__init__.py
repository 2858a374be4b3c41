"""
Balance-Sheet Fragility Simulator
=================================
Monte Carlo estimation of the fragility score of a bank balance-sheet
state under randomized stress shocks.

Modules
-------
- engine        : Entity state representation and the closed-form fragility score
- risk_modules  : Portfolio entropy (diversification index) helpers
- stress_testing: Shock generation, parallel path evaluation and risk statistics
- utils         : Formatting, tabular summaries and result packets
- dashboard     : Streamlit-based interactive reporting layer
"""

from fragility_simulator.config import ScoringConfig, SimulationConfig
from fragility_simulator.engine.entity_state import EntityState
from fragility_simulator.engine.scoring import compute_fragility
from fragility_simulator.errors import (
    EmptyRunError,
    FragilitySimulatorError,
    InvalidInputError,
)
from fragility_simulator.stress_testing import run_simulation
from fragility_simulator.stress_testing.statistics import (
    SimulationResult,
    summarize,
    tail_probability,
)

__version__ = "1.0.0"

__all__ = [
    "EntityState",
    "ScoringConfig",
    "SimulationConfig",
    "SimulationResult",
    "compute_fragility",
    "run_simulation",
    "summarize",
    "tail_probability",
    "FragilitySimulatorError",
    "InvalidInputError",
    "EmptyRunError",
]
