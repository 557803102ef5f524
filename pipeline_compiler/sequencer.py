import logging
from collections import deque
from typing import Dict, List, Sequence

from .graph import build_successor_map
from .schemas import Edge, Node

logger = logging.getLogger(__name__)


def sequence(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[Node]:
    """
    Order nodes so every node follows its predecessors (Kahn's algorithm).

    Ties are broken by input order through a FIFO queue. When a cycle keeps
    some nodes from ever reaching in-degree zero, the input order is returned
    unchanged; reporting the cycle is left to the structural validator.
    """
    by_id: Dict[str, Node] = {}
    for node in nodes:
        by_id.setdefault(node.id, node)

    successors = build_successor_map(list(by_id.values()), edges)
    in_degree: Dict[str, int] = {node_id: 0 for node_id in by_id}
    for targets in successors.values():
        for target in targets:
            in_degree[target] += 1

    queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
    ordered: List[Node] = []
    while queue:
        node_id = queue.popleft()
        ordered.append(by_id[node_id])
        for target in successors[node_id]:
            in_degree[target] -= 1
            if in_degree[target] == 0:
                queue.append(target)

    if len(ordered) != len(nodes):
        logger.warning(
            "Cycle detected in pipeline (%d of %d nodes ordered), using original node order",
            len(ordered),
            len(nodes),
        )
        return list(nodes)
    return ordered
