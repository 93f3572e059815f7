"""Graph exercises on adjacency matrices.

An adjacency matrix file starts with the node count ``n`` followed by
``n * n`` whitespace-separated entries, row by row. Unweighted graphs use
0/1 entries; weighted graphs use the edge weight, with 0 meaning no edge.
"""

from __future__ import annotations

import argparse
import math
import sys
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

Number = TypeVar("Number", int, float)
Edge = Tuple[int, int]


def parse_adjacency_matrix(
    text: str, number_type: Callable[[str], Number] = int
) -> List[List[Number]]:
    """Parse an ``n`` by ``n`` adjacency matrix preceded by its size ``n``.

    Raises ValueError when the size or any entry is missing or malformed.
    Text after the last entry is ignored.
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("adjacency matrix text must start with the node count")
    n = int(tokens[0])
    if n < 0:
        raise ValueError("node count must not be negative")
    entries = tokens[1:1 + n * n]
    if len(entries) < n * n:
        raise ValueError(f"expected {n * n} entries, found only {len(entries)}")
    values = [number_type(token) for token in entries]
    return [values[row * n:(row + 1) * n] for row in range(n)]


def _square_size(matrix: Sequence[Sequence[float]]) -> int:
    n = len(matrix)
    if any(len(row) != n for row in matrix):
        raise ValueError("adjacency matrix must be square")
    return n


def to_adjacency_list(matrix: Sequence[Sequence[float]]) -> List[List[int]]:
    """Return, for every node, the nodes its non-zero entries point to, in order."""
    _square_size(matrix)
    return [
        [column for column, weight in enumerate(row) if weight != 0]
        for row in matrix
    ]


def edge_list(matrix: Sequence[Sequence[int]]) -> List[Edge]:
    """Return the edges of an undirected graph as ``(row, column)`` pairs.

    Only the upper triangle, diagonal included, is read, so each edge is
    listed once; entries equal to 1 mark edges.
    """
    n = _square_size(matrix)
    return [
        (row, column)
        for row in range(n)
        for column in range(row, n)
        if matrix[row][column] == 1
    ]


def find_cycle(adjacency: Sequence[Sequence[int]]) -> Optional[List[int]]:
    """Return the first cycle a depth-first search finds in a directed graph.

    Nodes are searched from in ascending order and neighbours in list
    order. The cycle is returned starting at the node that closes it,
    followed by the nodes along the search path; None means the graph is
    acyclic.
    """
    n = len(adjacency)
    for neighbours in adjacency:
        for node in neighbours:
            if not 0 <= node < n:
                raise ValueError(f"neighbour {node} is not a node of the graph")
    visited = [False] * n
    on_path = [False] * n
    for root in range(n):
        if visited[root]:
            continue
        visited[root] = on_path[root] = True
        path = [root]
        pending = [iter(adjacency[root])]
        while pending:
            neighbour = next(pending[-1], None)
            if neighbour is None:
                on_path[path.pop()] = False
                pending.pop()
                continue
            if on_path[neighbour]:
                return path[path.index(neighbour):]
            if not visited[neighbour]:
                visited[neighbour] = on_path[neighbour] = True
                path.append(neighbour)
                pending.append(iter(adjacency[neighbour]))
    return None


def is_tree(matrix: Sequence[Sequence[int]]) -> bool:
    """Decide whether an undirected graph is a tree by counting its edges.

    The graph is accepted when it has fewer edges than nodes; connectivity
    is not examined.
    """
    return len(edge_list(matrix)) < len(matrix)


def minimum_spanning_tree(weights: Sequence[Sequence[float]]) -> List[Edge]:
    """Return the edges of a minimum spanning tree found by Prim's algorithm.

    The tree grows from node 0. Each step adds the lightest edge from a
    tree node to a node outside it; ties go to the tree node added
    earliest, then to the lowest-numbered new node. Edges are returned as
    ``(tree node, new node)`` in the order they were added. Raises
    ValueError when the graph is not connected.
    """
    n = _square_size(weights)
    if n <= 1:
        return []
    in_tree = [False] * n
    in_tree[0] = True
    order = [0]
    edges: List[Edge] = []
    while len(order) < n:
        best = math.inf
        chosen: Optional[Edge] = None
        for source in order:
            for target, weight in enumerate(weights[source]):
                if weight != 0 and not in_tree[target] and weight < best:
                    best = weight
                    chosen = (source, target)
        if chosen is None:
            raise ValueError("graph is not connected")
        in_tree[chosen[1]] = True
        order.append(chosen[1])
        edges.append(chosen)
    return edges


def _format_edges(edges: Sequence[Edge]) -> str:
    return "".join(f"{source} {target}\n" for source, target in edges)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one of the graph exercises on an adjacency matrix file."""
    parser = argparse.ArgumentParser(
        prog="archlab-graphs",
        description="Graph exercises on adjacency matrices.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name, text in (
        ("edges", "print the edge list of an undirected graph"),
        ("cycle", "find a cycle in a directed graph"),
        ("tree", "decide whether an undirected graph is a tree"),
        ("mst", "print a minimum spanning tree of a weighted graph"),
    ):
        sub = commands.add_parser(name, help=text)
        sub.add_argument("matrix", help="path to the adjacency matrix file")
    args = parser.parse_args(argv)

    try:
        with open(args.matrix, "r", encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        print(f"fopen failed: {exc.strerror}", file=sys.stderr)
        return 1

    try:
        if args.command == "mst":
            output = _format_edges(
                minimum_spanning_tree(parse_adjacency_matrix(text, float))
            )
        else:
            matrix = parse_adjacency_matrix(text, int)
            if args.command == "edges":
                output = _format_edges(edge_list(matrix))
            elif args.command == "tree":
                output = "yes" if is_tree(matrix) else "no"
            else:
                cycle = find_cycle(to_adjacency_list(matrix))
                if cycle is None:
                    output = "DAG\n"
                else:
                    output = "".join(f"{node} " for node in cycle)
    except ValueError as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0