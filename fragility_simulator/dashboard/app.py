"""
Streamlit Fragility Dashboard
=============================
Interactive view of:
  1. Base-case fragility score of the entity state
  2. Monte Carlo fragility distribution with VaR markers
  3. Tail exceedance curve and run summary table

Launch: streamlit run fragility_simulator/dashboard/app.py
"""

import numpy as np
import streamlit as st
import plotly.express as px
import plotly.graph_objects as go

from fragility_simulator.config import (
    ScoringConfig,
    SimulationConfig,
    LOW_RISK_CEILING,
    HIGH_RISK_FLOOR,
    REGULATORY_MIN_CAPITAL,
)
from fragility_simulator.engine.entity_state import EntityState
from fragility_simulator.engine.scoring import compute_fragility, risk_band
from fragility_simulator.errors import FragilitySimulatorError
from fragility_simulator.stress_testing import run_simulation
from fragility_simulator.stress_testing.statistics import exceedance_curve
from fragility_simulator.utils import format_pct, results_table, traffic_light


# ══════════════════════════════════════════════════════════════════════════════
#  Page Configuration
# ══════════════════════════════════════════════════════════════════════════════

st.set_page_config(
    page_title="Fragility Simulator",
    page_icon="🏦",
    layout="wide",
)


# ══════════════════════════════════════════════════════════════════════════════
#  Sidebar Controls
# ══════════════════════════════════════════════════════════════════════════════

st.sidebar.title("🏦 Fragility Simulator")
st.sidebar.markdown("### Entity State")
tier1 = st.sidebar.number_input("Tier 1 Capital", value=10_000.0, min_value=0.0, step=500.0)
assets = st.sidebar.number_input("Total Assets", value=100_000.0, min_value=0.0, step=5_000.0)
lcr = st.sidebar.number_input("Liquidity Coverage Ratio", value=1.2, min_value=0.0, step=0.05)
entropy = st.sidebar.number_input("Entropy Index", value=2.0, min_value=0.0, step=0.1)

st.sidebar.markdown("### Scoring")
sensitivity = st.sidebar.number_input("Lambda Sensitivity", value=2.0, min_value=0.0)
reg_min = st.sidebar.slider("Regulatory Minimum Capital", 0.0, 0.25,
                            REGULATORY_MIN_CAPITAL, step=0.005)

st.sidebar.markdown("### Monte Carlo")
mc_paths = st.sidebar.slider("Paths", 100, 50_000, 10_000, step=100)
shock_size = st.sidebar.slider("Shock Size (σ, %)", 0.0, 10.0, 2.0, step=0.1)
seed = st.sidebar.number_input("Seed", value=42, min_value=0, step=1)
workers = st.sidebar.number_input("Workers (0 = all CPUs)", value=0, min_value=0, step=1)

try:
    state = EntityState(tier1, assets, lcr, entropy)
    scoring = ScoringConfig(sensitivity, reg_min)
except FragilitySimulatorError as exc:
    st.error(str(exc))
    st.stop()


# ══════════════════════════════════════════════════════════════════════════════
#  Base Case
# ══════════════════════════════════════════════════════════════════════════════

st.title("🏦 Balance-Sheet Fragility Simulator")

base_score = compute_fragility(state, scoring)
col1, col2, col3, col4 = st.columns(4)
col1.metric("Fragility Score", f"{base_score:.2f}",
            delta=f"{traffic_light(base_score)} {risk_band(base_score)}",
            delta_color="off")
col2.metric("Capital Ratio", format_pct(state.capital_ratio),
            delta=f"min {format_pct(reg_min)}", delta_color="off")
col3.metric("Constraint Distance", f"{state.constraint_distance(reg_min):,.1f}")
col4.metric("LCR", f"{lcr:.0%}")


# ══════════════════════════════════════════════════════════════════════════════
#  Monte Carlo
# ══════════════════════════════════════════════════════════════════════════════

st.header("Monte Carlo Fragility Distribution")

if st.button("🚀 Run Simulation", type="primary"):
    sim_config = SimulationConfig(
        num_simulations=int(mc_paths),
        seed=int(seed),
        shock_size=float(shock_size),
        num_workers=int(workers),
    )
    with st.spinner(f"Running {mc_paths:,} paths..."):
        st.session_state["mc_result"] = run_simulation(state, scoring, sim_config)

if "mc_result" in st.session_state:
    res = st.session_state["mc_result"]

    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Mean", f"{res.mean:.2f}")
    c2.metric("Std Dev", f"{res.std_dev:.2f}")
    c3.metric("VaR 95%", f"{res.var_95:.2f}")
    c4.metric("VaR 99%", f"{res.var_99:.2f}")
    c5.metric("Max", f"{res.max_fragility:.2f}")

    col_a, col_b = st.columns(2)
    with col_a:
        fig_hist = px.histogram(
            x=list(res.fragilities),
            nbins=60,
            title="Path Fragility Distribution",
            labels={"x": "Fragility Score"},
            color_discrete_sequence=["#3949ab"],
        )
        fig_hist.add_vline(x=res.var_95, line_dash="dash",
                           line_color="orange", annotation_text="VaR 95%")
        fig_hist.add_vline(x=res.var_99, line_dash="dash",
                           line_color="red", annotation_text="VaR 99%")
        fig_hist.update_layout(height=350)
        st.plotly_chart(fig_hist, use_container_width=True)

    with col_b:
        thresholds = np.linspace(0.0, 100.0, 101)
        curve = exceedance_curve(res, thresholds)
        fig_tail = go.Figure()
        fig_tail.add_trace(go.Scatter(
            x=list(curve.keys()),
            y=list(curve.values()),
            mode="lines",
            name="P(score > x)",
            line=dict(width=3),
        ))
        fig_tail.add_vline(x=LOW_RISK_CEILING, line_dash="dot", line_color="green")
        fig_tail.add_vline(x=HIGH_RISK_FLOOR, line_dash="dot", line_color="red")
        fig_tail.update_layout(
            title="Tail Exceedance Curve",
            xaxis_title="Fragility threshold", yaxis_title="Probability",
            height=350,
        )
        st.plotly_chart(fig_tail, use_container_width=True)

    st.dataframe(results_table([res], labels=[f"seed {seed}"]), use_container_width=True)
else:
    st.info("Click **Run Simulation** to execute the Monte Carlo stress test.")
