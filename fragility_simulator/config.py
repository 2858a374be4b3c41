"""Configuration, scoring constants and simulation defaults."""

from dataclasses import dataclass
import math

from fragility_simulator.errors import InvalidInputError


# ── Regulatory thresholds ────────────────────────────────────────────────────
REGULATORY_MIN_CAPITAL = 0.08      # Basel III minimum capital ratio (8 %)


# ── Fragility score calibration ──────────────────────────────────────────────
LAMBDA_SENSITIVITY = 2.0           # Barrier multiplier on the solvent side
SATURATION_LAMBDA = 1_000.0        # Stress multiplier once the constraint is breached
ENTROPY_WEIGHT = 1.5               # Penalty per unit of diversification index
LIQUIDITY_WEIGHT = 10.0            # Weight on 1 / LCR
MAX_LIQUIDITY_STRESS = 1_000.0     # Liquidity term for LCR <= 0 (and its cap)
NORMALIZATION_SHIFT = 50.0         # k in 100 * raw / (raw + k)
SCORE_FLOOR = 0.0
SCORE_CEILING = 100.0


# ── Risk bands (fragility score) ─────────────────────────────────────────────
LOW_RISK_CEILING = 30.0            # 0-30   : well-capitalised
HIGH_RISK_FLOOR = 70.0             # 30-70  : stressed, 70-100 : near-insolvency


# ── Monte Carlo defaults ─────────────────────────────────────────────────────
DEFAULT_NUM_SIMULATIONS = 10_000
DEFAULT_SEED = 42
DEFAULT_SHOCK_SIZE = 2.0           # Standard deviation of each shock component
SHOCK_UNIT_SCALE = 0.01            # One shock unit = 1 % move in the field
N_SHOCK_DIMENSIONS = 4             # capital, assets, liquidity, entropy
VAR_CONFIDENCE_LEVELS = (0.95, 0.99)


def require_finite(name: str, value: float) -> float:
    """Reject NaN / inf values; return the value as a float."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value}")
    return value


def require_non_negative(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")
    return value


# ── Scoring parameters ───────────────────────────────────────────────────────
@dataclass(frozen=True)
class ScoringConfig:
    """Parameters of the capital-constraint barrier term."""
    lambda_sensitivity: float = LAMBDA_SENSITIVITY      # stress spike rate
    regulatory_min_capital: float = REGULATORY_MIN_CAPITAL

    def __post_init__(self):
        object.__setattr__(
            self, "lambda_sensitivity",
            require_non_negative("lambda_sensitivity", self.lambda_sensitivity),
        )
        ratio = require_non_negative("regulatory_min_capital", self.regulatory_min_capital)
        if ratio > 1.0:
            raise InvalidInputError(
                f"regulatory_min_capital must lie in [0, 1], got {ratio}"
            )
        object.__setattr__(self, "regulatory_min_capital", ratio)


# ── Monte Carlo parameters ───────────────────────────────────────────────────
@dataclass(frozen=True)
class SimulationConfig:
    """Monte Carlo run parameters.

    ``num_workers`` is a concurrency hint: 0 means one worker per available
    CPU. Invalid hints are resolved to that default by the engine rather
    than rejected here.
    """
    num_simulations: int = DEFAULT_NUM_SIMULATIONS
    seed: int = DEFAULT_SEED
    shock_size: float = DEFAULT_SHOCK_SIZE
    num_workers: int = 0

    def __post_init__(self):
        if isinstance(self.num_simulations, bool) or not isinstance(self.num_simulations, int):
            raise InvalidInputError(
                f"num_simulations must be an integer, got {self.num_simulations!r}"
            )
        if self.num_simulations < 0:
            raise InvalidInputError(
                f"num_simulations must be non-negative, got {self.num_simulations}"
            )
        if isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0:
            raise InvalidInputError(f"seed must be a non-negative integer, got {self.seed!r}")
        object.__setattr__(
            self, "shock_size", require_non_negative("shock_size", self.shock_size)
        )


# ── Portfolio entropy parameters ─────────────────────────────────────────────
@dataclass(frozen=True)
class EntropyConfig:
    """Parameters for the Shannon entropy of portfolio weights."""
    min_weight: float = 1e-6       # Positions below this weight are ignored
    normalize: bool = True         # Rescale weights to sum to 1.0
