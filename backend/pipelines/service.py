import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from backend.exceptions import ConfigurationRejectedError, NodeTypeNotFoundError
from pipeline_compiler import (
    Edge,
    GeneratedCode,
    InvalidConfigurationError,
    Node,
    NodeRegistry,
    PipelineValidation,
    apply_configuration,
    build_notebook,
    default_registry,
    generate,
    validate,
)
from pipeline_compiler.config_schema import visible_fields
from pipeline_compiler.nodes import BaseNodeType

logger = logging.getLogger(__name__)


class PipelineService:
    """Thin adapter from HTTP payloads onto the compiler core."""

    def __init__(self, registry: Optional[NodeRegistry] = None):
        self.registry = registry if registry is not None else default_registry

    def catalog(self) -> List[Dict[str, Any]]:
        return [descriptor.describe() for descriptor in self.registry.all_descriptors()]

    def node_type(self, node_type: str) -> BaseNodeType:
        descriptor = self.registry.lookup(node_type)
        if descriptor is None:
            raise NodeTypeNotFoundError(node_type)
        return descriptor

    def configure(
        self,
        node_type: str,
        current: Optional[Mapping[str, Any]],
        updates: Mapping[str, Any],
    ) -> Dict[str, Any]:
        descriptor = self.node_type(node_type)
        try:
            merged = apply_configuration(descriptor.type, current, updates, self.registry)
        except InvalidConfigurationError as exc:
            raise ConfigurationRejectedError(exc.node_type, exc.issues) from exc
        return {
            "type": descriptor.type,
            "configuration": merged,
            "visible_fields": [field.key for field in visible_fields(descriptor.type, merged, self.registry)],
        }

    def fill_categories(self, nodes: Sequence[Node]) -> List[Node]:
        """Nodes sent without a category take the registered one."""
        filled = []
        for node in nodes:
            if not node.category:
                category = self.registry.category_of(node)
                if category:
                    node = node.model_copy(update={"category": category})
            filled.append(node)
        return filled

    def validate(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> PipelineValidation:
        report = validate(self.fill_categories(nodes), edges, self.registry)
        logger.debug(
            "Validated %d node(s): %d error(s), %d warning(s)",
            len(nodes),
            len(report.errors),
            len(report.warnings),
        )
        return report

    def generate(
        self, nodes: Sequence[Node], edges: Sequence[Edge], include_labels: bool = True
    ) -> GeneratedCode:
        return generate(self.fill_categories(nodes), edges, self.registry, include_labels=include_labels)

    def notebook(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        project_name: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        return build_notebook(
            self.fill_categories(nodes),
            edges,
            project_name=project_name,
            registry=self.registry,
            generated_at=generated_at,
        )
