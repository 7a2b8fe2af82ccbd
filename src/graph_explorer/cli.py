"""Console entrypoint for the ``graph-explorer`` command."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import os
import sys
import time
from collections.abc import Sequence

from graph_explorer.dot import load_dot, resolve_starts
from graph_explorer.errors import ExplorationError
from graph_explorer.graph import Graph
from graph_explorer.sink import NodeSink, gather_results
from graph_explorer.strategies import Parallel, Sequential, Strategy
from graph_explorer.types import NodeData

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "GRAPH_EXPLORER_LOG_LEVEL"
N_WORKERS_ENV = "GRAPH_EXPLORER_N_WORKERS"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISMATCH = 3


@dataclasses.dataclass
class Report:
    """The outcome of running one strategy."""

    strategy: str
    results: list[NodeData]
    elapsed_us: int

    def lines(self, *, verbose: bool) -> list[str]:
        """Render the report for the terminal."""
        lines = [
            f"--- {self.strategy} ---",
            f"Explored {len(self.results)} nodes.",
            f"Finished successfully in {self.elapsed_us} us.",
        ]
        if verbose:
            lines.append("Nodes:")
            lines.extend(
                f"\t- {record.name} at distance {record.distance}"
                for record in self.results
            )
        return lines


async def run_strategy(graph: Graph, strategy: Strategy, starts: list[str]) -> Report:
    """
    Explore `graph` with `strategy` while gathering and timing the results.

    The exploration and the gathering of its records run concurrently.
    """
    sink = NodeSink()
    start = time.perf_counter_ns()
    results, _ = await asyncio.gather(
        gather_results(sink), strategy.run(graph, starts, sink)
    )
    elapsed_us = (time.perf_counter_ns() - start) // 1000
    logger.info("%s finished in %d us", strategy.name, elapsed_us)
    return Report(strategy=strategy.name, results=results, elapsed_us=elapsed_us)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(
            "The number of parallel workers cannot be lower than 1."
        )
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser, with defaults taken from the environment."""
    parser = argparse.ArgumentParser(
        prog="graph-explorer",
        description=(
            "Compute the distance of every node reachable from the starting"
            " nodes, sequentially and in parallel, and compare the results."
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="print more information about the search",
    )
    parser.add_argument(
        "--n_workers",
        "--n-workers",
        dest="n_workers",
        type=_positive_int,
        default=os.environ.get(N_WORKERS_ENV, "1"),
        help=f"number of parallel workers (default: ${N_WORKERS_ENV} or 1)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    parser.add_argument("path", help="path to the DOT file to explore")
    parser.add_argument(
        "starts",
        nargs="+",
        metavar="start",
        help="names of the nodes in the starting frontier",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run both strategies and report the results."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        graph = load_dot(args.path)
        starts = resolve_starts(graph, args.starts)
        strategies: list[Strategy] = [Sequential(), Parallel(n_workers=args.n_workers)]
    except (ExplorationError, OSError) as exc:
        logger.error("%s", exc)
        return EXIT_ERROR

    reports = []
    for strategy in strategies:
        report = asyncio.run(run_strategy(graph, strategy, starts))
        if reports:
            print()
        print("\n".join(report.lines(verbose=args.verbose)))
        reports.append(report)

    expected = reports[0].results
    for report in reports[1:]:
        if report.results != expected:
            logger.warning(
                "%s and %s produced different results!",
                reports[0].strategy,
                report.strategy,
            )
            return EXIT_MISMATCH
    return EXIT_OK
