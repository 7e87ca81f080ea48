"""
CLI entry point for the armtraj-plan command.

Plans a minimum-jerk joint trajectory and prints it as JSON.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from armtraj.config import (
    DEFAULT_DT_S,
    DEFAULT_DURATION_S,
    DOF,
    FULL_OUTPUT,
    LOG_LEVEL_DEFAULT,
    TRACE,
    TRACE_ENABLED,
)
from armtraj.server.session import PlanningSession
from armtraj.utils.errors import TrajectoryPlanningError

logger = logging.getLogger("armtraj.cli.plan")


def _joint_list(raw: str) -> List[float]:
    try:
        return [float(p.strip()) for p in raw.split(",") if p.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma separated radians, got {raw!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="armtraj-plan", description="Plan a minimum-jerk joint trajectory"
    )
    parser.add_argument("--target", type=_joint_list, required=True,
                        help="Target joint angles in rad, comma separated")
    parser.add_argument("--start", type=_joint_list,
                        help="Start joint angles in rad (default: all zeros)")
    parser.add_argument("-T", "--duration", type=float, default=DEFAULT_DURATION_S,
                        help=f"Duration in seconds (default {DEFAULT_DURATION_S})")
    parser.add_argument("--dt", type=float, default=DEFAULT_DT_S,
                        help=f"Sample interval in seconds (default {DEFAULT_DT_S})")
    parser.add_argument("--dof", type=int, default=DOF, help=f"Number of joints (default {DOF})")
    parser.add_argument("--full", action="store_true", default=bool(FULL_OUTPUT),
                        help="Include dq, ddq, jerk, costates and cost per sample")
    parser.add_argument("--indent", type=int, default=None, help="JSON indentation")

    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Enable quiet logging (ERROR level)')
    parser.add_argument('--log-level', choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set specific log level')
    return parser


def _resolve_log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        if args.log_level == 'TRACE':
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.ERROR
    if TRACE_ENABLED:
        return TRACE
    return getattr(logging, LOG_LEVEL_DEFAULT)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the planner CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=_resolve_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        session = PlanningSession(dof=args.dof)
        if args.start is not None:
            session.model.set_state(args.start, [0.0] * args.dof)
        result = session.plan_to(args.target, T=args.duration, dt=args.dt)
    except (TrajectoryPlanningError, ValueError) as e:
        logger.error(f"Failed to plan trajectory: {e}")
        return 1

    json.dump(result.to_dict(full=args.full), sys.stdout, indent=args.indent)
    sys.stdout.write("\n")
    return 0


def main_entry():
    """Entry point for the armtraj-plan command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
