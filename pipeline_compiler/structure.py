from collections import Counter
from typing import List, Optional, Sequence

from .constants import NodeCategory
from .graph import connected_node_ids, has_cycle
from .registry import NodeRegistry, default_registry
from .schemas import Edge, Node, ValidationResult


def check_structure(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    registry: Optional[NodeRegistry] = None,
) -> List[ValidationResult]:
    """Whole-graph checks. Every check runs; results come back in a fixed order."""
    registry = registry if registry is not None else default_registry
    results: List[ValidationResult] = []
    categories = {registry.category_of(node) for node in nodes}

    if NodeCategory.DATA.value not in categories:
        results.append(
            ValidationResult.error(
                "Pipeline must include at least one data processing node",
                "Add a Data Ingestion node to start your pipeline",
            )
        )

    if NodeCategory.MODEL.value not in categories:
        results.append(
            ValidationResult.warning(
                "Pipeline has no model development nodes",
                "Add Model Selection and Training nodes",
            )
        )

    if len(nodes) > 1:
        connected = connected_node_ids(edges)
        disconnected = [node for node in nodes if node.id not in connected]
        if disconnected:
            results.append(
                ValidationResult.warning(
                    f"{len(disconnected)} disconnected node(s)",
                    "Connect all nodes to create a complete pipeline",
                )
            )

    if has_cycle(nodes, edges):
        results.append(
            ValidationResult.error(
                "Pipeline contains circular dependencies",
                "Remove cycles to create a valid directed acyclic graph",
            )
        )

    results.extend(check_cardinality(nodes, registry))
    return results


def check_cardinality(nodes: Sequence[Node], registry: Optional[NodeRegistry] = None) -> List[ValidationResult]:
    """One error per node type whose instance count exceeds its ``max_instances``."""
    registry = registry if registry is not None else default_registry
    counts = Counter(node.type for node in nodes)
    results: List[ValidationResult] = []
    for node_type, count in counts.items():
        descriptor = registry.lookup(node_type)
        if descriptor is None or descriptor.max_instances is None:
            continue
        if count > descriptor.max_instances:
            if descriptor.max_instances == 1:
                message = f"Only one {descriptor.label} node ({descriptor.type}) is allowed per pipeline"
            else:
                message = (
                    f"At most {descriptor.max_instances} {descriptor.label} nodes "
                    f"({descriptor.type}) are allowed per pipeline"
                )
            results.append(
                ValidationResult.error(
                    message,
                    f"Remove {count - descriptor.max_instances} of the {count} {descriptor.label} nodes",
                )
            )
    return results
