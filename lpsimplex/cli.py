"""Solve an LP described by a JSON file and print the tableau trace and result.

The JSON file holds ``{"c": [...], "A": [[...], ...], "b": [...]}`` for

    maximize c^T x  subject to  A x <= b, x >= 0
"""

import argparse
import json
import sys
from decimal import Decimal

from lpsimplex.simplex import EPS, LPResult, StandardForm, fmt_out, simplex


def model_from_config(cfg) -> StandardForm:
    if not isinstance(cfg, dict):
        raise ValueError("LP description must be a JSON object with keys c, A, b")
    missing = [key for key in ("c", "A", "b") if key not in cfg]
    if missing:
        raise ValueError(f"LP description is missing: {', '.join(missing)}")
    return StandardForm(c=cfg["c"], A=cfg["A"], b=cfg["b"])


def load_model(path: str) -> StandardForm:
    with open(path, "r") as f:
        # Parse floats as Decimal so 0.1 stays 0.1 until the model converts it
        cfg = json.load(f, parse_float=Decimal)
    return model_from_config(cfg)


def print_result(res: LPResult) -> None:
    print("\n=== Result ===")
    print("Status:", res.status)
    if res.status == "feasible":
        print("Optimal value:", fmt_out(res.objective))
        print("Solution x:", [fmt_out(v) for v in res.solution])
    print("Iterations:", res.iterations)
    if res.status == "feasible" and res.details.get("alternate_optimal"):
        print("Note: Infinite many optimal solutions (alternate optimal).")
        print("Zero reduced-cost nonbasic vars:", res.details.get("alt_zero_rc_vars"))


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Two-phase tableau Simplex for max c^T x s.t. Ax <= b, x >= 0")
    p.add_argument("json", help="Path to JSON file describing the LP")
    p.add_argument("--eps", type=float, default=EPS, help="Tolerance for all comparisons (default: %(default)s)")
    p.add_argument("--no-verbose", action="store_true", help="Hide iteration printouts")
    p.add_argument("--graph", action="store_true", help="Plot constraints and iso-profit (2 variables only)")
    args = p.parse_args(argv)

    standard = load_model(args.json)
    res = simplex(standard, eps=args.eps, verbose=not args.no_verbose)
    print_result(res)

    if args.graph:
        from lpsimplex.graph import graph
        graph(standard, res)
    return 0


if __name__ == "__main__":
    sys.exit(main())
