"""
Risk Statistics
===============
Reduces the per-path fragility scores of a Monte Carlo run into
summary risk metrics:
  - mean and population standard deviation (the simulated paths are
    the whole synthetic population, so the divisor is N)
  - empirical Value-at-Risk at 95 % and 99 % (score at rank floor(q·N)
    of the ascending order, capped at N-1)
  - worst observed score
"""

from __future__ import annotations

import json
import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple, Union

from fragility_simulator.config import VAR_CONFIDENCE_LEVELS
from fragility_simulator.errors import EmptyRunError, InvalidInputError

_SUMMARY_FIELDS = ("mean", "std_dev", "var_95", "var_99", "max_fragility")


@dataclass(frozen=True)
class SimulationResult:
    """Aggregate result of one Monte Carlo run."""
    fragilities: Tuple[float, ...]   # Per-path scores, in path-index order
    mean: float
    std_dev: float
    var_95: float
    var_99: float
    max_fragility: float

    @property
    def n_paths(self) -> int:
        return len(self.fragilities)

    def to_dict(self, include_paths: bool = True) -> Dict[str, Union[float, list]]:
        data = {
            "mean": self.mean,
            "std_dev": self.std_dev,
            "var_95": self.var_95,
            "var_99": self.var_99,
            "max_fragility": self.max_fragility,
            "n_paths": self.n_paths,
        }
        if include_paths:
            data["fragilities"] = list(self.fragilities)
        return data

    def to_json(self, include_paths: bool = True) -> str:
        return json.dumps(self.to_dict(include_paths=include_paths))

    @classmethod
    def from_dict(cls, data: Dict) -> "SimulationResult":
        """
        Rebuild a result from ``to_dict`` output.

        The summary figures are recomputed from the per-path scores; any
        stored figure that disagrees with them is rejected.
        """
        if "fragilities" not in data:
            raise InvalidInputError("cannot rebuild a result without per-path scores")
        result = summarize(data["fragilities"])
        if "n_paths" in data and int(data["n_paths"]) != result.n_paths:
            raise InvalidInputError(
                f"n_paths is {data['n_paths']} but {result.n_paths} scores were given"
            )
        for key in _SUMMARY_FIELDS:
            if key in data and not math.isclose(
                float(data[key]), getattr(result, key), rel_tol=1e-9, abs_tol=1e-12
            ):
                raise InvalidInputError(
                    f"{key} is {data[key]} but the scores give {getattr(result, key)}"
                )
        return result


def value_at_risk(sorted_scores: np.ndarray, confidence: float) -> float:
    """Empirical quantile of an ascending array (no interpolation)."""
    n = len(sorted_scores)
    idx = min(int(confidence * n), n - 1)
    return float(sorted_scores[idx])


def summarize(scores: Iterable[float]) -> SimulationResult:
    """
    Build a ``SimulationResult`` from per-path scores.

    The input order is kept verbatim in ``fragilities``; VaR figures are
    read from a sorted copy.
    """
    fragilities = tuple(float(s) for s in scores)
    if not fragilities:
        raise EmptyRunError("cannot summarize a simulation with zero paths")

    arr = np.asarray(fragilities, dtype=float)
    sorted_scores = np.sort(arr)
    q95, q99 = VAR_CONFIDENCE_LEVELS

    return SimulationResult(
        fragilities=fragilities,
        mean=float(np.mean(arr)),
        std_dev=float(np.std(arr)),
        var_95=value_at_risk(sorted_scores, q95),
        var_99=value_at_risk(sorted_scores, q99),
        max_fragility=float(sorted_scores[-1]),
    )


def tail_probability(result: SimulationResult, threshold: float) -> float:
    """Fraction of paths whose score is strictly greater than ``threshold``."""
    if result.n_paths == 0:
        raise EmptyRunError("tail probability of an empty result is undefined")
    exceedances = sum(1 for f in result.fragilities if f > threshold)
    return exceedances / result.n_paths


def exceedance_curve(
    result: SimulationResult, thresholds: Sequence[float]
) -> Dict[float, float]:
    """Tail probability at each threshold, for plotting."""
    return {float(t): tail_probability(result, t) for t in thresholds}
