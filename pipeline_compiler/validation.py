"""Pipeline validator: structure, node rules and per-edge compatibility in one report."""

import logging
from typing import Dict, List, Optional, Sequence

from . import compatibility
from .registry import NodeRegistry, default_registry
from .schemas import Edge, Node, Pipeline, PipelineValidation, ValidationResult
from .structure import check_structure

logger = logging.getLogger(__name__)

NODE_NOT_FOUND_MESSAGE = "Invalid connection: node not found"
NODE_NOT_FOUND_SUGGESTION = "Remove the connection or restore the missing node"


def check_node_rules(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    registry: Optional[NodeRegistry] = None,
) -> Dict[str, List[ValidationResult]]:
    """Evaluate every registered node's rules against the whole pipeline.

    Only nodes with at least one finding appear in the returned mapping.
    """
    registry = registry if registry is not None else default_registry
    pipeline = Pipeline(nodes=list(nodes), edges=list(edges))
    findings: Dict[str, List[ValidationResult]] = {}
    for node in nodes:
        descriptor = registry.lookup(node.type)
        if descriptor is None:
            continue
        results = descriptor.evaluate_rules(node.configuration, pipeline)
        if results:
            findings.setdefault(node.id, []).extend(results)
    return findings


def validate(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    registry: Optional[NodeRegistry] = None,
) -> PipelineValidation:
    """
    Build the aggregated validation report for a pipeline.

    Safe to call on every graph mutation: it reads its inputs only and returns
    the same report for the same graph.
    """
    registry = registry if registry is not None else default_registry
    errors: List[ValidationResult] = []
    warnings: List[ValidationResult] = []

    def collect(result: ValidationResult) -> None:
        if result.is_error:
            errors.append(result)
        elif result.is_warning:
            warnings.append(result)

    for result in check_structure(nodes, edges, registry):
        collect(result)

    per_node_results = check_node_rules(nodes, edges, registry)
    for results in per_node_results.values():
        for result in results:
            collect(result)

    node_map = Pipeline(nodes=list(nodes), edges=list(edges)).node_map()

    per_edge_result: Dict[str, ValidationResult] = {}
    for edge in edges:
        source = node_map.get(edge.source)
        target = node_map.get(edge.target)
        if source is None or target is None:
            logger.debug("Edge %s references a missing node (%s -> %s)", edge.id, edge.source, edge.target)
            result = ValidationResult.error(NODE_NOT_FOUND_MESSAGE, NODE_NOT_FOUND_SUGGESTION)
        else:
            result = compatibility.check(
                source.type,
                target.type,
                registry.category_of(source),
                registry.category_of(target),
                registry=registry,
            )
        per_edge_result[edge.id] = result
        collect(result)

    return PipelineValidation(
        overall_valid=not errors,
        errors=errors,
        warnings=warnings,
        per_edge_result=per_edge_result,
        per_node_results=per_node_results,
    )
