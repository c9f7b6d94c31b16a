# cli.py
import argparse
import logging
import sys
from typing import Dict, List, Optional

from .config import RunConfig, load_config
from .logconf import setup_logger
from .parameters import UNSET, get_default_parameters
from .recorder import CsvRecorder, OutputSinkUnavailable, load_trajectory
from .simulation import SimulationError, simulate
from .state_vector import species_index


def _parse_assignment(text: str) -> Dict[str, float]:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    name, value = text.split("=", 1)
    name = name.strip()
    try:
        species_index(name)
    except KeyError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    try:
        return {name: float(value)}
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None


def _step_cap(text: str) -> Optional[float]:
    if text.strip().lower() == "none":
        return None
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' is not a number or 'none'") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rho-myosin",
        description="Integrate the spine Rho/myosin signalling model with adaptive step-size control",
    )
    parser.add_argument("--output", "-o", type=str, default="data.csv", help="CSV file for the trajectory")
    parser.add_argument("--config", type=str, default=None, help="TOML run configuration")

    integ = parser.add_argument_group("integrator", "options left out keep the configured value")
    integ.add_argument("--t-end", type=float, default=UNSET)
    integ.add_argument("--initial-step", type=float, default=UNSET)
    integ.add_argument("--sample-interval", type=float, default=UNSET)
    integ.add_argument("--tolerance", type=float, default=UNSET)
    integ.add_argument("--shrink-max", type=float, default=UNSET)
    integ.add_argument("--grow-max", type=float, default=UNSET)
    integ.add_argument("--safety", type=float, default=UNSET)
    integ.add_argument("--min-step", type=float, default=UNSET)
    integ.add_argument("--max-step", type=_step_cap, default=UNSET,
                       help="cap on the step size; 'none' removes a configured cap")
    integ.add_argument("--catch-up-samples", action="store_true", default=UNSET,
                       help="skip sampling slots overshot by a long step")

    model = parser.add_argument_group("model")
    model.add_argument("--init", type=_parse_assignment, action="append", default=[],
                       metavar="NAME=VALUE", help="override an initial concentration (repeatable)")
    model.add_argument("--saturating-rhogef", action="store_true",
                       help="use 1 + [RhoGEF] as RhoGEF activation denominator")

    parser.add_argument("--plot", type=str, default=None, help="save an overview figure to this path")
    parser.add_argument("--progress", action="store_true")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def _run_config(args: argparse.Namespace) -> RunConfig:
    cfg = load_config(args.config) if args.config else RunConfig()
    cfg.settings = cfg.settings.with_overrides(
        t_end=args.t_end,
        initial_step=args.initial_step,
        sample_interval=args.sample_interval,
        tolerance=args.tolerance,
        shrink_max=args.shrink_max,
        grow_max=args.grow_max,
        safety=args.safety,
        min_step=args.min_step,
        max_step=args.max_step,
        catch_up_samples=args.catch_up_samples,
    )
    for assignment in args.init:
        cfg.initial_conditions.update(assignment)
    if args.saturating_rhogef:
        cfg.literal_rhogef_denominator = False
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logger(level=getattr(logging, args.log_level))

    try:
        cfg = _run_config(args)
    except (OSError, ValueError, KeyError) as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2

    params = get_default_parameters()
    params.rho_myosin.literal_rhogef_denominator = cfg.literal_rhogef_denominator

    try:
        with CsvRecorder(args.output) as recorder:
            result = simulate(
                params=params,
                settings=cfg.settings,
                initial_conditions=cfg.initial_conditions,
                recorder=recorder,
                progress=args.progress,
            )
    except (OutputSinkUnavailable, SimulationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print("integration complete.")
    for line in result.stats.summary_lines():
        print(line)

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from .plotting import plot_overview

        fig = plot_overview(load_trajectory(args.output))
        fig.savefig(args.plot, dpi=150)
        print(f"[Plot] Saved {args.plot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
