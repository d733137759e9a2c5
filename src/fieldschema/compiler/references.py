# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reference graph over derived schemas and its cycle check.

A schema defers to another type's accessor for each object reference. If
those references form a cycle, the generated accessors would call each other
without bound, so such declarations are rejected before emission.
"""

from __future__ import annotations

from collections.abc import Sequence

from fieldschema.model.schema import DeclarationSchema

# ###############
# Public Interface
# ###############


def reference_graph(schemas: Sequence[DeclarationSchema]) -> dict[str, list[str]]:
    """Return the adjacency list mapping each schema to the types it references."""
    return {schema.type_name: list(schema.references) for schema in schemas}


def detect_cycle(graph: dict[str, list[str]], start: str) -> list[str] | None:
    """Detect a cycle reachable from *start* using DFS.

    Uses a three-colour marking scheme (white/grey/black) to distinguish
    unvisited, in-progress, and fully-explored nodes.

    Args:
        graph: Adjacency list mapping each node to its direct neighbours.
            Nodes that appear only as neighbours (not as keys) are treated
            as having no outgoing edges.
        start: Node to start the search from.

    Returns:
        A list of node names forming the cycle with the first repeated node
        repeated at the end (e.g. ``["A", "B", "A"]``), or ``None`` if no
        cycle is reachable from *start*.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    color: dict[str, int] = {}
    path: list[str] = []

    def _dfs(node: str) -> list[str] | None:
        color[node] = GREY
        path.append(node)
        for neighbor in graph.get(node, []):
            state = color.get(neighbor, WHITE)
            if state == GREY:
                cycle_start = path.index(neighbor)
                return path[cycle_start:] + [neighbor]
            if state == WHITE:
                result = _dfs(neighbor)
                if result is not None:
                    return result
        path.pop()
        color[node] = BLACK
        return None

    return _dfs(start)


def nodes_on_cycles(graph: dict[str, list[str]]) -> set[str]:
    """Return every node of *graph* that can reach itself again."""
    return {node for node in graph if node in _reachable(graph, graph[node])}


def nodes_reaching_cycles(graph: dict[str, list[str]]) -> set[str]:
    """Return every node that lies on a cycle or can reach one."""
    cyclic = nodes_on_cycles(graph)
    if not cyclic:
        return set()
    return {node for node in graph if node in cyclic or _reachable(graph, graph[node]) & cyclic}


# ################
# Implementation
# ################


def _reachable(graph: dict[str, list[str]], roots: list[str]) -> set[str]:
    """Return all nodes reachable from *roots* (inclusive)."""
    seen: set[str] = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        stack.extend(graph.get(node, []))
    return seen
