"""CLI script that reads an instance file and prints a short summary."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from instance_reader import (  # noqa: E402
    InstanceReaderError,
    read_graph_matrix,
    read_set_cover_instance,
    read_steiner_instance,
)


def _summarize(kind: str, path: Path) -> str:
    if kind == "setcover":
        scp = read_set_cover_instance(path)
        return (
            f"{path.name}: {scp.num_constraints} constraints, {scp.num_variables} variables, "
            f"total cost {int(scp.cost_vector().sum())}"
        )
    if kind == "graph":
        graph = read_graph_matrix(path)
        return f"{path.name}: {graph.num_vertices} vertices, {graph.num_edges} edges"
    directed = kind == "steiner-directed"
    stp = read_steiner_instance(path, directed=directed)
    root = f", root {stp.root}" if directed else ""
    return (
        f"{path.name}: {stp.num_vertices} vertices, {stp.num_links} links, "
        f"terminals {sorted(stp.terminals)}{root}"
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Read an optimization instance file")
    parser.add_argument("kind", choices=["setcover", "graph", "steiner", "steiner-directed"])
    parser.add_argument("path", type=Path)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    args = parser.parse_args()

    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        print(_summarize(args.kind, args.path))
    except InstanceReaderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
