"""
Command-line entry point: score a state or run a Monte Carlo simulation.
Usage: python -m fragility_simulator <command> [options]
"""

import argparse
import logging
import sys
from typing import List, Optional

from fragility_simulator.config import (
    ScoringConfig,
    SimulationConfig,
    LAMBDA_SENSITIVITY,
    REGULATORY_MIN_CAPITAL,
    DEFAULT_NUM_SIMULATIONS,
    DEFAULT_SEED,
    DEFAULT_SHOCK_SIZE,
)
from fragility_simulator.engine.entity_state import EntityState, leverage_ratio
from fragility_simulator.engine.scoring import compute_fragility, risk_band
from fragility_simulator.errors import FragilitySimulatorError
from fragility_simulator.risk_modules.entropy import (
    calculate_entropy,
    concentration_risk,
    normalized_entropy,
    positions_from_weights,
)
from fragility_simulator.stress_testing import run_simulation
from fragility_simulator.stress_testing.statistics import tail_probability
from fragility_simulator.utils import format_pct, traffic_light

RISK_MESSAGES = {
    "HIGH": "HIGH RISK - state approaching critical instability",
    "MEDIUM": "MEDIUM RISK - elevated fragility detected",
    "LOW": "LOW RISK - state appears stable",
}


def _rule(title: str):
    print(f"\n{'─' * 40}")
    print(title)
    print(f"{'─' * 40}")


def _add_state_args(parser: argparse.ArgumentParser):
    parser.add_argument("--tier1-capital", type=float, required=True)
    parser.add_argument("--total-assets", type=float, required=True)
    parser.add_argument("--liquidity-coverage", type=float, required=True)
    parser.add_argument("--entropy-index", type=float, default=0.0)
    _add_scoring_args(parser)


def _add_scoring_args(parser: argparse.ArgumentParser):
    parser.add_argument("--lambda-sensitivity", type=float, default=LAMBDA_SENSITIVITY)
    parser.add_argument("--regulatory-min", type=float, default=REGULATORY_MIN_CAPITAL)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fragility",
        description="Balance-sheet fragility scoring and Monte Carlo stress testing",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    sub = parser.add_subparsers(dest="command", required=True)

    p_score = sub.add_parser("fragility", help="score a single entity state")
    _add_state_args(p_score)

    p_sim = sub.add_parser("simulate", help="run a Monte Carlo simulation")
    _add_state_args(p_sim)
    p_sim.add_argument("-n", "--paths", type=int, default=DEFAULT_NUM_SIMULATIONS)
    p_sim.add_argument("--seed", type=int, default=DEFAULT_SEED)
    p_sim.add_argument("--shock-size", type=float, default=DEFAULT_SHOCK_SIZE)
    p_sim.add_argument("--workers", type=int, default=0,
                       help="worker processes (0 = all CPUs)")
    p_sim.add_argument("--threshold", type=float, default=None,
                       help="also report P(score > threshold)")
    p_sim.add_argument("--json", action="store_true", help="print the result as JSON")

    p_bs = sub.add_parser("balance-sheet",
                          help="score leverage-style balance-sheet figures")
    p_bs.add_argument("--assets", type=float, required=True)
    p_bs.add_argument("--liabilities", type=float, required=True)
    p_bs.add_argument("--equity", type=float, required=True)
    p_bs.add_argument("--liquidity-coverage", type=float, default=1.0)
    p_bs.add_argument("--entropy-index", type=float, default=0.0)
    _add_scoring_args(p_bs)

    p_ent = sub.add_parser("entropy", help="portfolio entropy of position weights")
    p_ent.add_argument("-w", "--weights", type=float, nargs="+", required=True)
    return parser


def _state_from_args(args) -> EntityState:
    return EntityState(
        tier1_capital=args.tier1_capital,
        total_assets=args.total_assets,
        liquidity_coverage=args.liquidity_coverage,
        entropy_index=args.entropy_index,
    )


def _scoring_from_args(args) -> ScoringConfig:
    return ScoringConfig(
        lambda_sensitivity=args.lambda_sensitivity,
        regulatory_min_capital=args.regulatory_min,
    )


def _print_state(state: EntityState):
    print(f"  Tier 1 Capital:     {state.tier1_capital:>14,.2f}")
    print(f"  Total Assets:       {state.total_assets:>14,.2f}")
    print(f"  Capital Ratio:      {format_pct(state.capital_ratio):>14}")
    print(f"  Liquidity Coverage: {state.liquidity_coverage:>14.2f}")
    print(f"  Entropy Index:      {state.entropy_index:>14.4f}")


def _print_score(score: float):
    print(f"\n  Fragility Score: {score:.4f}")
    print(f"  {traffic_light(score)} {RISK_MESSAGES[risk_band(score)]}")


def cmd_fragility(args) -> int:
    state = _state_from_args(args)
    score = compute_fragility(state, _scoring_from_args(args))
    _rule("ENTITY STATE")
    _print_state(state)
    _print_score(score)
    return 0


def cmd_simulate(args) -> int:
    state = _state_from_args(args)
    sim_config = SimulationConfig(
        num_simulations=args.paths,
        seed=args.seed,
        shock_size=args.shock_size,
        num_workers=args.workers,
    )
    result = run_simulation(state, _scoring_from_args(args), sim_config)

    if args.json:
        print(result.to_json())
        return 0

    _rule(f"MONTE CARLO — {sim_config.num_simulations:,} paths")
    print(f"  Mean Fragility: {result.mean:.4f}")
    print(f"  Std Deviation:  {result.std_dev:.4f}")
    print(f"  95% VaR:        {result.var_95:.4f}")
    print(f"  99% VaR:        {result.var_99:.4f}")
    print(f"  Max Fragility:  {result.max_fragility:.4f}")
    if args.threshold is not None:
        p = tail_probability(result, args.threshold)
        print(f"  P(score > {args.threshold:g}): {format_pct(p)}")
    return 0


def cmd_balance_sheet(args) -> int:
    state = EntityState.from_balance_sheet(
        assets=args.assets,
        liabilities=args.liabilities,
        equity=args.equity,
        liquidity_coverage=args.liquidity_coverage,
        entropy_index=args.entropy_index,
    )
    leverage = leverage_ratio(args.liabilities, args.equity)
    score = compute_fragility(state, _scoring_from_args(args))
    _rule("BALANCE SHEET")
    print(f"  Assets:      {args.assets:>14,.2f}")
    print(f"  Liabilities: {args.liabilities:>14,.2f}")
    print(f"  Equity:      {args.equity:>14,.2f}")
    print(f"  Leverage:    {leverage:>13.2f}x")
    print(f"  Capital Ratio: {format_pct(state.capital_ratio)}")
    _print_score(score)
    return 0


def cmd_entropy(args) -> int:
    positions = positions_from_weights(args.weights)
    entropy = calculate_entropy(positions)
    conc = concentration_risk(positions)
    _rule("PORTFOLIO ENTROPY")
    print(f"  Shannon Entropy:    {entropy:.4f} bits")
    print(f"  Normalized Entropy: {normalized_entropy(positions):.4f}")
    print(f"  Concentration Risk: {format_pct(conc)}")
    if conc > 0.7:
        print("  HIGH CONCENTRATION - portfolio highly concentrated")
    elif conc > 0.4:
        print("  MEDIUM CONCENTRATION - consider diversification")
    else:
        print("  WELL DIVERSIFIED - healthy portfolio distribution")
    return 0


COMMANDS = {
    "fragility": cmd_fragility,
    "simulate": cmd_simulate,
    "balance-sheet": cmd_balance_sheet,
    "entropy": cmd_entropy,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except FragilitySimulatorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
