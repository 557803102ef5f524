"""Plain graph helpers over node and edge collections."""

import time
from typing import Dict, Iterable, List, Optional, Sequence, Set

from .schemas import Edge, Node, canonical_type


def build_successor_map(nodes: Sequence[Node], edges: Iterable[Edge]) -> Dict[str, List[str]]:
    """Adjacency list keyed by node id, in input order. Dangling edges are ignored."""
    successors: Dict[str, List[str]] = {}
    for node in nodes:
        successors.setdefault(node.id, [])
    for edge in edges:
        if edge.source in successors and edge.target in successors:
            successors[edge.source].append(edge.target)
    return successors


def connected_node_ids(edges: Iterable[Edge]) -> Set[str]:
    connected: Set[str] = set()
    for edge in edges:
        connected.add(edge.source)
        connected.add(edge.target)
    return connected


def has_cycle(nodes: Sequence[Node], edges: Iterable[Edge]) -> bool:
    """Depth-first search with an explicit recursion stack.

    A node reached again while it is still on the active path closes a cycle.
    The walk uses an explicit stack of iterators so deep graphs do not hit the
    interpreter recursion limit.
    """
    successors = build_successor_map(nodes, edges)
    visited: Set[str] = set()
    on_path: Set[str] = set()

    for start in successors:
        if start in visited:
            continue
        visited.add(start)
        on_path.add(start)
        stack = [(start, iter(successors[start]))]
        while stack:
            node_id, neighbours = stack[-1]
            advanced = False
            for neighbour in neighbours:
                if neighbour in on_path:
                    return True
                if neighbour not in visited:
                    visited.add(neighbour)
                    on_path.add(neighbour)
                    stack.append((neighbour, iter(successors[neighbour])))
                    advanced = True
                    break
            if not advanced:
                on_path.discard(node_id)
                stack.pop()
    return False


def generate_node_id(node_type: str, existing_ids: Iterable[str] = (), now_ms: Optional[int] = None) -> str:
    """Build ``{type}-{millis}``, suffixing a counter if the id is already taken."""
    taken = set(existing_ids)
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    base = f"{canonical_type(node_type)}-{stamp}"
    candidate = base
    counter = 1
    while candidate in taken:
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


def remove_node(nodes: Sequence[Node], edges: Sequence[Edge], node_id: str):
    """Drop a node and every edge touching it."""
    kept_nodes = [node for node in nodes if node.id != node_id]
    kept_edges = [edge for edge in edges if edge.source != node_id and edge.target != node_id]
    return kept_nodes, kept_edges
