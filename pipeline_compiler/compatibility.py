"""Connection compatibility between adjacent node types.

The checker only classifies a connection (valid, warning or error); it never
prevents one from being drawn.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .constants import NodeType, PHASE_NAMES, PHASE_ORDER
from .registry import NodeRegistry, default_registry
from .schemas import ValidationResult, canonical_type

BACKWARDS_MESSAGE = "Connecting backwards in the pipeline flow"
BACKWARDS_SUGGESTION = "Standard flow is: Data → Model → Deployment"
SKIP_SUGGESTION = "Consider adding intermediate steps for better results"
SUBOPTIMAL_MESSAGE = "This connection may be suboptimal"
DEFAULT_SUBOPTIMAL_SUGGESTION = "Consider adding intermediate nodes"


@dataclass(frozen=True)
class CompatibilityRule:
    allowed: Tuple[str, ...]
    # target type -> remediation suggestion (None uses the generic one)
    warnings: Dict[str, Optional[str]] = field(default_factory=dict)


COMPATIBILITY_RULES: Dict[str, CompatibilityRule] = {
    NodeType.INGEST.value: CompatibilityRule(
        allowed=(
            NodeType.PREPROCESS.value,
            NodeType.EXPLORATION.value,
            NodeType.FEATURE_ENGINEERING.value,
            NodeType.DATA_SPLIT.value,
        ),
        warnings={NodeType.DATA_SPLIT.value: "Consider adding preprocessing before splitting data"},
    ),
    NodeType.PREPROCESS.value: CompatibilityRule(
        allowed=(
            NodeType.EXPLORATION.value,
            NodeType.FEATURE_ENGINEERING.value,
            NodeType.DATA_SPLIT.value,
            NodeType.PREPROCESS.value,
        ),
    ),
    NodeType.EXPLORATION.value: CompatibilityRule(
        allowed=(
            NodeType.PREPROCESS.value,
            NodeType.FEATURE_ENGINEERING.value,
            NodeType.DATA_SPLIT.value,
        ),
        warnings={NodeType.DATA_SPLIT.value: "Consider feature engineering before splitting"},
    ),
    NodeType.FEATURE_ENGINEERING.value: CompatibilityRule(
        allowed=(NodeType.DATA_SPLIT.value, NodeType.FEATURE_ENGINEERING.value),
    ),
    NodeType.DATA_SPLIT.value: CompatibilityRule(
        allowed=(NodeType.MODEL_SELECTION.value, NodeType.TRAINING.value),
        warnings={NodeType.TRAINING.value: "Consider selecting a model before training"},
    ),
    NodeType.MODEL_SELECTION.value: CompatibilityRule(
        allowed=(NodeType.TRAINING.value, NodeType.MODEL_SELECTION.value),
    ),
    NodeType.TRAINING.value: CompatibilityRule(
        allowed=(NodeType.EVALUATION.value, NodeType.TRAINING.value),
    ),
    NodeType.EVALUATION.value: CompatibilityRule(
        allowed=(NodeType.DEPLOYMENT.value, NodeType.TRAINING.value, NodeType.EVALUATION.value),
        warnings={NodeType.DEPLOYMENT.value: "Ensure model performance is satisfactory before deployment"},
    ),
    NodeType.DEPLOYMENT.value: CompatibilityRule(
        allowed=(NodeType.DEPLOYMENT.value,),
    ),
}


def _phase(category: Any) -> Optional[int]:
    if isinstance(category, Enum):
        category = category.value
    if not category:
        return None
    return PHASE_ORDER.get(str(category).lower())


def _category_of(node_type: str, registry: NodeRegistry) -> Optional[str]:
    descriptor = registry.lookup(node_type)
    return descriptor.category.value if descriptor is not None else None


def check(
    source_type: Any,
    target_type: Any,
    source_category: Any = None,
    target_category: Any = None,
    registry: Optional[NodeRegistry] = None,
) -> ValidationResult:
    """Classify a ``source -> target`` connection.

    Categories default to the registered category of each type when omitted.
    Phase ordering is checked first (backwards, then skipped phase), then the
    per-type table. A source type without a table entry, or a target type the
    registry does not know, is unconstrained.
    """
    registry = registry if registry is not None else default_registry
    source = canonical_type(source_type)
    target = canonical_type(target_type)

    source_phase = _phase(source_category or _category_of(source, registry))
    target_phase = _phase(target_category or _category_of(target, registry))

    if source_phase is not None and target_phase is not None:
        if target_phase < source_phase:
            return ValidationResult.warning(BACKWARDS_MESSAGE, BACKWARDS_SUGGESTION)
        if target_phase - source_phase > 1:
            skipped = PHASE_NAMES.get(source_phase + 1, "intermediate")
            return ValidationResult.warning(f"Skipping {skipped} phase", SKIP_SUGGESTION)

    rule = COMPATIBILITY_RULES.get(source)
    if rule is None or target not in registry:
        return ValidationResult.valid("Connection allowed")

    if target not in rule.allowed:
        return ValidationResult.error(
            f"{source} cannot connect to {target}",
            f"{source} can connect to: {', '.join(rule.allowed)}",
        )

    if target in rule.warnings:
        return ValidationResult.warning(
            SUBOPTIMAL_MESSAGE,
            rule.warnings[target] or DEFAULT_SUBOPTIMAL_SUGGESTION,
        )

    return ValidationResult.valid("Connection is valid")
