#!/usr/bin/env python3
"""CLI for the groovy commutator explorer."""

import argparse
import sys

from .config import RunConfig
from .errors import CellularAutomatonError
from .metrics import activity_clusters, density
from .rules import (
    CLASS_III_RULES,
    CLASS_IV_RULES,
    TRIVIAL_RULES,
    LifeRule,
    MemoryBehavior,
    parse_rule,
    rule_table_dict,
)
from .simulation import RunResult, run


def _build(config: RunConfig):
    try:
        return config.build_rule(), config.build_initial()
    except CellularAutomatonError as e:
        print(f"Error: {e}")
        sys.exit(1)


def _config_from_args(args, **overrides) -> RunConfig:
    try:
        return RunConfig.from_args(args, **overrides)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def _print_run(result: RunResult, verbose: bool):
    if verbose:
        print(f"{'Step':<6}{'rho':<10}{'G':<10}")
        for t, (d, g) in enumerate(zip(result.derivatives, result.groovy)):
            print(f"{t:<6}{density(d):<10.4f}{density(g):<10.4f}")
        print()

    m = result.metrics
    print("Metrics:")
    print(f"  rho (derivative density): {m.derivative_density:.4f}")
    print(f"  Groovy density:           {m.groovy_density:.4f}")
    if m.second_order_density is not None:
        print(f"  Second-order density:     {m.second_order_density:.4f}")
    print(f"  Final state density:      {density(result.final_state):.4f}")
    print(f"  Final G clusters:         {activity_clusters(result.groovy[-1])}")


def cmd_run(args):
    """Run an elementary automaton."""
    config = _config_from_args(args, mode="1d")
    rule, initial = _build(config)

    print(f"Running {rule.to_string()}")
    print(f"  Width: {config.width}")
    print(f"  Steps: {config.steps}")
    print(f"  Init:  {config.init}")
    print()

    _print_run(run(initial, rule, config.steps), args.verbose)


def cmd_aware(args):
    """Run an aware automaton."""
    config = _config_from_args(args, mode="aware")
    rule, initial = _build(config)

    print(f"Running {rule.to_string()} (base rule {config.rule}, {config.behavior})")
    print(f"  Width: {config.width}")
    print(f"  Steps: {config.steps}")
    print("  Note: groovy density uses one shared history for both commutator paths")
    print()

    _print_run(run(initial, rule, config.steps), args.verbose)


def cmd_life(args):
    """Run a Life-like automaton on a torus."""
    try:
        life = LifeRule.from_string(args.life_rule)
    except CellularAutomatonError as e:
        print(f"Error parsing rule '{args.life_rule}': {e}")
        sys.exit(1)

    config = _config_from_args(
        args,
        mode="2d",
        birth=sorted(life.birth),
        survival=sorted(life.survival),
        width=args.grid_size,
        height=args.grid_size,
    )
    rule, initial = _build(config)

    print(f"Running {rule.to_string()}")
    print(f"  Grid size: {config.height}x{config.width}")
    print(f"  Steps: {config.steps}")
    print()

    _print_run(run(initial, rule, config.steps), args.verbose)


def cmd_table(args):
    """Print the lookup table of a rule."""
    try:
        rule = parse_rule(args.rule)
    except CellularAutomatonError as e:
        print(f"Error parsing rule '{args.rule}': {e}")
        sys.exit(1)

    print(f"{rule.to_string()}  (lambda = {rule.lambda_parameter():.4f})")
    if isinstance(rule, LifeRule):
        print(f"  Birth:    {sorted(rule.birth)}")
        print(f"  Survival: {sorted(rule.survival)}")
        return

    for pattern, out in rule_table_dict(rule.table).items():
        print(f"  {pattern} -> {out}")


def cmd_classes(args):
    """Compare mean densities across a list of elementary rules."""
    rules = args.rules or list(CLASS_IV_RULES + CLASS_III_RULES + TRIVIAL_RULES)
    print(f"Scanning {len(rules)} rules, width {args.width}, {args.steps} steps\n")
    print(f"{'Rule':<8}{'rho':<10}{'G':<10}{'G2':<10}")
    print("-" * 38)

    for number in rules:
        config = _config_from_args(args, mode="1d", rule=number)
        rule, initial = _build(config)
        m = run(initial, rule, config.steps).metrics
        print(f"{number:<8}{m.derivative_density:<10.4f}{m.groovy_density:<10.4f}"
              f"{m.second_order_density:<10.4f}")


def _add_common(parser, width_default=200):
    parser.add_argument("--width", type=int, default=width_default, help="Number of cells")
    parser.add_argument("--steps", type=int, default=150, help="Simulation steps")
    parser.add_argument("--density", type=float, default=None, help="Initial live-cell fraction")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print per-step densities")


def main():
    parser = argparse.ArgumentParser(
        description="Groovy Commutator explorer - measure how a CA's update and change operators fail to commute"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Elementary run
    run_parser = subparsers.add_parser("run", help="Run an elementary (rule 0-255) automaton")
    run_parser.add_argument("rule", type=int, nargs="?", default=110, help="Rule number")
    run_parser.add_argument("--init", choices=["random", "single"], default="random", help="Initial state")
    _add_common(run_parser)
    run_parser.set_defaults(func=cmd_run)

    # Aware run
    aware_parser = subparsers.add_parser("aware", help="Run an aware automaton lifted from an elementary rule")
    aware_parser.add_argument("rule", type=int, nargs="?", default=110, help="Base rule number")
    aware_parser.add_argument("-b", "--behavior", choices=[b.value for b in MemoryBehavior],
                              default="ignore", help="Output for cells that changed last step")
    aware_parser.add_argument("--aware-number", type=int, default=None,
                              help="Explicit aware rule number (0-65535), overrides rule/behavior")
    aware_parser.add_argument("--init", choices=["random", "single"], default="random", help="Initial state")
    _add_common(aware_parser)
    aware_parser.set_defaults(func=cmd_aware)

    # Life-like run
    life_parser = subparsers.add_parser("life", help="Run a Life-like automaton")
    life_parser.add_argument("life_rule", type=str, nargs="?", default="B3/S23",
                             help="Rule in B/S notation (e.g., B3/S23)")
    life_parser.add_argument("--grid-size", type=int, default=100, help="Grid size")
    life_parser.add_argument("--steps", type=int, default=150, help="Simulation steps")
    life_parser.add_argument("--density", type=float, default=None, help="Initial live-cell fraction")
    life_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    life_parser.add_argument("-v", "--verbose", action="store_true", help="Print per-step densities")
    life_parser.set_defaults(func=cmd_life)

    # Table command
    table_parser = subparsers.add_parser("table", help="Show the lookup table of a rule")
    table_parser.add_argument("rule", type=str, help="110, aware:N or B3/S23")
    table_parser.set_defaults(func=cmd_table)

    # Class scan command
    classes_parser = subparsers.add_parser("classes", help="Compare densities across elementary rules")
    classes_parser.add_argument("rules", type=int, nargs="*", help="Rule numbers (default: known class examples)")
    classes_parser.add_argument("--init", choices=["random", "single"], default="random", help="Initial state")
    _add_common(classes_parser)
    classes_parser.set_defaults(func=cmd_classes)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
