"""
Command-line entry point for the request simulation.

Runs the simulation, writes the event log, and prints a summary of
the request that waited longest.
"""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import TextIO

from priosim.exceptions import ConfigurationError
from priosim.simulation.driver import RequestSimulation, SimulationConfig, SimulationResult
from priosim.simulation.event_log import DEFAULT_LOG_PATH, EventLogConfig, EventLogger

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="priosim",
        description="Simulate request admission and service with a priority queue.",
    )
    parser.add_argument(
        "--steps", type=int, default=None,
        help="number of generation steps (prompted for when omitted)",
    )
    parser.add_argument(
        "--log-file", type=Path, default=Path(DEFAULT_LOG_PATH),
        help="where to write ADD/REMOVE records (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--min-arrivals", type=int, default=1)
    parser.add_argument("--max-arrivals", type=int, default=10)
    parser.add_argument("--min-priority", type=int, default=1)
    parser.add_argument("--max-priority", type=int, default=5)

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="only print the summary"
    )
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="also list every request"
    )
    return parser


def read_steps(stdin: TextIO, stdout: TextIO) -> int | None:
    """Prompt for the number of steps; None if the answer is not an integer."""
    stdout.write("Number of steps N: ")
    stdout.flush()
    answer = stdin.readline().strip()
    try:
        return int(answer)
    except ValueError:
        return None


def format_summary(result: SimulationResult, log_file: Path, log_size: int) -> str:
    """Render the end-of-run report."""
    rule = "=" * 50
    lines = [
        f"Total requests created: {result.total_created}",
        f"Served after generation stopped: {result.removed_during_drain}",
        "",
        rule,
        "RESULTS",
        rule,
    ]

    served = result.max_wait
    if served is None:
        lines.append("No requests were served")
    else:
        lines += [
            f"Maximum wait time: {served.wait_time} steps",
            "",
            "Request with the maximum wait time:",
            f"  Request: #{served.request_id}",
            f"  Priority: {served.priority}",
            f"  Added at step: {served.step_added}",
            f"  Removed at step: {served.step_removed}",
            f"  Wait time: {served.wait_time} steps",
        ]

    lines += [
        "",
        f"Event log written to: {log_file}",
        f"Event log size: {log_size} bytes",
    ]
    return "\n".join(lines)


def configure_logging(args: Namespace) -> None:
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """
    Run the simulation from the command line.

    Returns:
        Process exit code.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    args = build_parser().parse_args(argv)
    configure_logging(args)

    steps = args.steps
    if steps is None:
        steps = read_steps(stdin, stdout)
        if steps is None:
            print("Error: N must be an integer", file=stderr)
            return EXIT_USAGE

    config = SimulationConfig(
        steps=steps,
        min_arrivals=args.min_arrivals,
        max_arrivals=args.max_arrivals,
        min_priority=args.min_priority,
        max_priority=args.max_priority,
        seed=args.seed,
    )

    try:
        with EventLogger(EventLogConfig.default(args.log_file)) as event_log:
            simulation = RequestSimulation(config, event_log=event_log)
            result = simulation.run()
            log_size = event_log.size_bytes()
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=stderr)
        return EXIT_USAGE
    except OSError as e:
        logger.error(f"Failed to write event log {args.log_file}: {e}")
        print(f"I/O error: {e}", file=stderr)
        return EXIT_IO_ERROR

    print(format_summary(result, args.log_file, log_size), file=stdout)
    return EXIT_OK
