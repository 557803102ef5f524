"""Boundary checks for node configuration.

The compiler reads configuration leniently. This module is where updates
coming from a form or an API are checked against the node type's field
descriptors before they are stored.
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import InvalidConfigurationError
from .fields import FieldDescriptor
from .registry import NodeRegistry, default_registry
from .schemas import canonical_type

logger = logging.getLogger(__name__)


def _registry(registry: Optional[NodeRegistry]) -> NodeRegistry:
    return registry if registry is not None else default_registry


def default_configuration(node_type: str, registry: Optional[NodeRegistry] = None) -> Dict[str, Any]:
    descriptor = _registry(registry).lookup(node_type)
    if descriptor is None:
        raise InvalidConfigurationError(canonical_type(node_type), [f"Unknown node type: {node_type}"])
    return descriptor.default_configuration()


def visible_fields(
    node_type: str,
    config: Mapping[str, Any],
    registry: Optional[NodeRegistry] = None,
) -> List[FieldDescriptor]:
    descriptor = _registry(registry).lookup(node_type)
    if descriptor is None:
        return []
    effective = descriptor.effective_configuration(config)
    return [field for field in descriptor.fields if field.is_visible(effective)]


def validate_configuration(
    node_type: str,
    config: Mapping[str, Any],
    registry: Optional[NodeRegistry] = None,
) -> List[str]:
    """Issues with ``config`` for ``node_type``; empty when it is acceptable.

    Hidden fields are not checked. Keys without a descriptor (labels, UI
    metadata) pass through.
    """
    descriptor = _registry(registry).lookup(node_type)
    if descriptor is None:
        return [f"Unknown node type: {node_type}"]

    effective = descriptor.effective_configuration(config)
    issues: List[str] = []
    for field in descriptor.fields:
        if not field.is_visible(effective):
            continue
        issue = field.check(effective.get(field.key))
        if issue:
            issues.append(issue)
    return issues


def apply_configuration(
    node_type: str,
    current: Optional[Mapping[str, Any]],
    updates: Mapping[str, Any],
    registry: Optional[NodeRegistry] = None,
) -> Dict[str, Any]:
    """
    Merge ``updates`` over ``current`` and return the checked result.

    A visible field the caller did not touch whose stored value no longer
    fits (for example metrics after switching the evaluation type) is reset to
    that field's default. Any remaining issue raises InvalidConfigurationError.
    """
    registry = _registry(registry)
    descriptor = registry.lookup(node_type)
    if descriptor is None:
        raise InvalidConfigurationError(canonical_type(node_type), [f"Unknown node type: {node_type}"])

    merged = descriptor.effective_configuration(current)
    merged.update(copy.deepcopy(dict(updates)))

    for field in descriptor.fields:
        if field.key in updates or not field.is_visible(merged):
            continue
        if field.check(merged.get(field.key)):
            logger.debug("Resetting stale '%s' on %s to its default", field.key, descriptor.type)
            merged[field.key] = copy.deepcopy(field.default)

    issues = validate_configuration(descriptor.type, merged, registry)
    if issues:
        raise InvalidConfigurationError(descriptor.type, issues)
    return merged
