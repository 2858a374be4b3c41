"""Utility helpers for formatting and display."""

import pandas as pd
from typing import List, Dict, Sequence

from fragility_simulator.engine.scoring import risk_band
from fragility_simulator.stress_testing.statistics import SimulationResult


def format_pct(value: float, decimals: int = 2) -> str:
    """Format a decimal as percentage string."""
    return f"{value * 100:.{decimals}f}%"


def format_score(value: float, decimals: int = 4) -> str:
    return f"{value:.{decimals}f}"


def dict_list_to_df(data: List[Dict]) -> pd.DataFrame:
    """Convert a list of dicts to a formatted DataFrame."""
    return pd.DataFrame(data)


def traffic_light(score: float) -> str:
    """Return a traffic-light emoji for a fragility score."""
    band = risk_band(score)
    if band == "LOW":
        return "🟢"
    elif band == "MEDIUM":
        return "🟡"
    return "🔴"


def results_table(
    results: Sequence[SimulationResult], labels: Sequence[str] = ()
) -> pd.DataFrame:
    """One row of summary metrics per simulation result."""
    labels = list(labels) or [f"Run {i + 1}" for i in range(len(results))]
    rows = []
    for label, res in zip(labels, results):
        rows.append({
            "Run": label,
            "Paths": res.n_paths,
            "Mean": round(res.mean, 4),
            "Std Dev": round(res.std_dev, 4),
            "VaR 95%": round(res.var_95, 4),
            "VaR 99%": round(res.var_99, 4),
            "Max": round(res.max_fragility, 4),
            "Band (VaR 99%)": risk_band(res.var_99),
        })
    return dict_list_to_df(rows)
