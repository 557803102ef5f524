from typing import Any, Dict, Iterable, List, Optional

from .nodes import (
    BaseNodeType,
    DataSplitNode,
    DeploymentNode,
    EvaluationNode,
    ExplorationNode,
    FeatureEngineeringNode,
    IngestNode,
    ModelSelectionNode,
    PreprocessNode,
    TrainingNode,
)
from .schemas import Node, canonical_type


class NodeRegistry:
    """Read-only map from canonical node type to its descriptor.

    Populated once at construction; there is no public way to register a type
    afterwards, so a shared instance is safe for concurrent readers.
    """

    def __init__(self, node_types: Optional[Iterable[BaseNodeType]] = None):
        self._types: Dict[str, BaseNodeType] = {}
        for node_type in node_types if node_types is not None else _default_node_types():
            self._register(node_type)

    def _register(self, node_type: BaseNodeType) -> None:
        key = canonical_type(node_type.type)
        if key in self._types:
            raise ValueError(f"Duplicate node type registration: {key}")
        self._types[key] = node_type

    def lookup(self, node_type: Any) -> Optional[BaseNodeType]:
        return self._types.get(canonical_type(node_type))

    def category_of(self, node: Node) -> str:
        """The node's own category, falling back to its registered one."""
        if node.category:
            return node.category
        descriptor = self.lookup(node.type)
        return descriptor.category.value if descriptor is not None else ""

    def label_of(self, node: Node) -> str:
        if node.label:
            return node.label
        descriptor = self.lookup(node.type)
        return descriptor.label if descriptor is not None else node.type

    def all_descriptors(self) -> List[BaseNodeType]:
        return list(self._types.values())

    def types(self) -> List[str]:
        return list(self._types.keys())

    def __contains__(self, node_type: Any) -> bool:
        return canonical_type(node_type) in self._types

    def __len__(self) -> int:
        return len(self._types)


def _default_node_types() -> List[BaseNodeType]:
    return [
        IngestNode(),
        PreprocessNode(),
        ExplorationNode(),
        FeatureEngineeringNode(),
        DataSplitNode(),
        ModelSelectionNode(),
        TrainingNode(),
        EvaluationNode(),
        DeploymentNode(),
    ]


default_registry = NodeRegistry()


def lookup(node_type: Any) -> Optional[BaseNodeType]:
    return default_registry.lookup(node_type)
