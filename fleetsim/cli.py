"""Command line driver: build a scenario and run simulation cycles."""

import argparse
import logging

from fleetsim.config import (
    DEFAULT_CYCLES,
    DEMO_DESTINATION,
    LOG_LEVEL,
    SHOW_SNAPSHOT,
    SimulationConfig,
)
from fleetsim.errors import FleetSimError
from fleetsim.logging_config import CONSOLE, setup_logger
from fleetsim.scenarios import default_scenario, load_scenario
from fleetsim.simulator import SimulationLoop

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fleetsim",
        description="Fleet dispatch simulation: assign units to missions cycle by cycle",
    )
    parser.add_argument(
        "--cycles", type=int, default=DEFAULT_CYCLES, help="number of cycles to run"
    )
    parser.add_argument(
        "--until-complete",
        action="store_true",
        help="stop as soon as every mission is completed",
    )
    parser.add_argument("--units", help="CSV file with columns id,variant,capacity,location")
    parser.add_argument(
        "--missions", help="CSV file with columns id,kind,origin,destination,payload"
    )
    parser.add_argument(
        "--demo-capabilities",
        action="store_true",
        help=f"move every unit to '{DEMO_DESTINATION}' and exercise its capabilities first",
    )
    parser.add_argument(
        "--no-snapshot",
        dest="show_snapshot",
        action="store_false",
        default=SHOW_SNAPSHOT,
        help="do not print the status panel after each cycle",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="logging level (default: INFO)")
    parser.add_argument("--log-file", help="also write the log to this file")
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(
        cycles=args.cycles,
        stop_when_complete=args.until_complete,
        show_snapshot=args.show_snapshot,
        log_level=args.log_level,
        log_file=args.log_file,
        demo_capabilities=args.demo_capabilities,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.units is None) != (args.missions is None):
        parser.error("--units and --missions must be given together")

    try:
        config = config_from_args(args)
        setup_logger(config.log_level, log_file=config.log_file)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        if args.units is not None:
            environment = load_scenario(args.units, args.missions)
        else:
            environment = default_scenario()

        loop = SimulationLoop(environment, show_snapshot=config.show_snapshot)
        if config.demo_capabilities:
            loop.demonstrate_capabilities()
        reports = loop.run(config.cycles, stop_when_complete=config.stop_when_complete)
    except (FleetSimError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    completed = len(environment.completed_missions())
    CONSOLE.print(
        f"[b]{len(reports)}[/b] cycles run, "
        f"[b]{completed}/{len(environment.missions)}[/b] missions completed"
    )
    return 0
