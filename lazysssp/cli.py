"""Command-line interface for running shortest-path queries."""

from __future__ import annotations

import argparse
import itertools
import json
import sys
import time
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .connections import DIRECTIONS
from .exceptions import ConfigError, InputError, LazySSSPError, NodeNotFoundError
from .export import export_tree_graphml, export_tree_json
from .graph import Graph
from .intermediates import Intermediates
from .io import FORMATS, read_graph
from .logger import StdLogger
from .shortest_paths import Dijkstra, DijkstraConfig

EXAMPLE_CSV = """# u,v,w
0,1,1.0
1,2,2.0
0,2,5.0
2,3,1.0
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, fmt: Optional[str], directed: bool) -> Graph:
    if not Path(path).is_file():
        raise InputError(f"edges file not found: {path}")
    return read_graph(path, fmt, directed=directed)


def _build_random_graph(n: int, m: int, seed: int, directed: bool) -> Graph:
    """Generate a random graph for quick experiments."""
    import random

    if n <= 0 or m < 0:
        raise InputError("--n must be positive and --m non-negative")
    rnd = random.Random(seed)
    edges: List[Tuple[int, int, float]] = []
    for _ in range(m):
        u = rnd.randrange(n)
        v = rnd.randrange(n)
        w = round(rnd.random() * 10.0, 3)
        edges.append((u, v, w))
    return Graph.from_edges(edges, nodes=range(n), directed=directed)


def _build_parser() -> argparse.ArgumentParser:
    examples = (
        "Examples:\n"
        "  lazysssp --edges graph.csv --source 0\n"
        "  lazysssp --edges graph.csv --source 0 --target 3\n"
        "  lazysssp --random --n 100 --m 500 --limit 10\n"
        "  lazysssp --edges graph.csv --export-json tree.json\n"
    )
    p = argparse.ArgumentParser(
        prog="lazysssp",
        description="Lazy single-source shortest paths (Dijkstra)",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=list(FORMATS),
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--undirected", action="store_true", help="Treat edges as undirected")

    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed for random graph generation")

    p.add_argument("--source", type=int, default=0, help="Source vertex id")
    p.add_argument("--target", type=int, default=None, help="Stop once this vertex is settled")
    p.add_argument("--direction", choices=list(DIRECTIONS), default="outgoing")
    p.add_argument(
        "--no-intermediates",
        action="store_true",
        help="Report distances only, without the vertices in between",
    )
    p.add_argument("--limit", type=int, default=None, help="Report at most this many routes")

    p.add_argument("--export-json", type=str, default=None, help="Write shortest-path tree as JSON")
    p.add_argument(
        "--export-graphml",
        type=str,
        default=None,
        help="Write shortest-path tree as GraphML",
    )
    p.add_argument("--metrics-out", type=str, default=None, help="Write run metrics to this JSON file")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``lazysssp`` command-line tool."""
    p = _build_parser()
    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        directed = not args.undirected
        if args.random:
            G = _build_random_graph(args.n, args.m, args.seed, directed)
        else:
            G = _build_graph_from_file(args.edges, args.format, directed)

        if args.target is not None and G.node(args.target) is None:
            raise NodeNotFoundError(args.target)
        if args.limit is not None and args.limit < 0:
            raise InputError("--limit must be non-negative")
        if args.no_intermediates and (args.export_json or args.export_graphml):
            raise ConfigError("tree export needs recorded intermediates; drop --no-intermediates")

        cfg = DijkstraConfig(
            direction=args.direction,
            intermediates=Intermediates.DISCARD if args.no_intermediates else Intermediates.RECORD,
        )
        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={G.num_nodes()} m={G.num_edges()} direction={args.direction} "
                f"directed={directed} intermediates={cfg.intermediates.value} seed={args.seed}\n"
            )

        solver = Dijkstra(cfg, logger=logger)
        t0 = time.perf_counter()
        search = solver.path_from(G, args.source)
        routes = []
        found = None
        for route in itertools.islice(search, args.limit):
            routes.append(route)
            if args.target is not None and route.target.id == args.target:
                found = route
                break
        wall_ms = (time.perf_counter() - t0) * 1000.0

        out: Dict[str, Any] = {
            "source": args.source,
            "direction": args.direction,
            "routes": [r.to_dict() for r in routes],
        }
        if args.target is not None:
            out["target"] = args.target
            out["route"] = found.to_dict() if found is not None else None
            if found is None:
                logger.warning("target.not_reached", source=args.source, target=args.target)

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_tree_json(G, routes))
        if args.export_graphml:
            with open(args.export_graphml, "w", encoding="utf-8") as fh:
                fh.write(export_tree_graphml(G, routes))
        if args.metrics_out:
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(search.metrics(wall_ms=wall_ms)), fh)

        logger.info(
            "run",
            n=G.num_nodes(),
            m=G.num_edges(),
            direction=args.direction,
            source=args.source,
            routes=len(routes),
            wall_ms=round(wall_ms, 3),
            **search.summary(),
        )
        if not args.log_json:
            print(json.dumps(out))
        return EXIT_OK

    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except (LazySSSPError, OSError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
