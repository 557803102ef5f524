import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..constants import NodeCategory, Severity
from ..fields import FieldDescriptor, field_defaults
from ..schemas import Pipeline, ValidationResult

logger = logging.getLogger(__name__)

Config = Dict[str, Any]
RulePredicate = Callable[[Config, Pipeline], bool]


def literal(value: Any) -> str:
    """Python source for a configuration value (lists become list literals)."""
    if isinstance(value, (list, tuple)):
        return repr(list(value))
    return repr(value) if isinstance(value, str) else str(value)


def text_or(value: Any, fallback: str) -> str:
    value = "" if value is None else str(value).strip()
    return value or fallback


def number_or(value: Any, fallback: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    return value


def choice_or(value: Any, choices: Iterable[str], fallback: str) -> str:
    """``value`` when it is one of ``choices``, otherwise ``fallback``."""
    if isinstance(value, str) and value in choices:
        return value
    return fallback


@dataclass(frozen=True)
class NodeRule:
    """A per-node check; ``predicate`` returns True when the rule is violated."""

    severity: Severity
    message: str
    predicate: RulePredicate
    suggestion: Optional[str] = None


class BaseNodeType(ABC):
    """Descriptor for one node type: metadata, form fields, template and rules."""

    type: str = ""
    label: str = ""
    category: NodeCategory = NodeCategory.DATA
    description: str = ""
    max_instances: Optional[int] = None
    fields: Tuple[FieldDescriptor, ...] = ()
    rules: Tuple[NodeRule, ...] = ()

    @abstractmethod
    def generate_code(self, config: Config) -> str:
        """
        Render this node's Python source from a complete configuration.
        Must be a pure function of ``config``.
        """
        pass

    def default_configuration(self) -> Config:
        defaults = {"label": self.label}
        defaults.update(field_defaults(self.fields))
        return defaults

    def effective_configuration(self, configuration: Optional[Mapping[str, Any]]) -> Config:
        given = dict(configuration) if configuration else {}
        merged = self.default_configuration()
        merged.update(copy.deepcopy(given))
        # Omitted dependent keys take the default of the branch the given values select
        for field in self.fields:
            if field.key not in given and field.depends_on is not None and field.is_visible(merged):
                merged[field.key] = copy.deepcopy(field.default)
        return merged

    def render(self, configuration: Optional[Mapping[str, Any]]) -> str:
        return self.generate_code(self.effective_configuration(configuration))

    def evaluate_rules(self, configuration: Optional[Mapping[str, Any]], pipeline: Pipeline) -> List[ValidationResult]:
        config = self.effective_configuration(configuration)
        results: List[ValidationResult] = []
        for rule in self.rules:
            try:
                violated = rule.predicate(config, pipeline)
            except Exception as exc:
                logger.warning("Rule '%s' on %s could not be evaluated: %s", rule.message, self.type, exc)
                continue
            if violated:
                results.append(
                    ValidationResult(severity=rule.severity, message=rule.message, suggestion=rule.suggestion)
                )
        return results

    def describe(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label,
            "category": self.category.value,
            "description": self.description,
            "max_instances": self.max_instances,
            "default_configuration": self.default_configuration(),
            "fields": [field.to_dict() for field in self.fields],
        }
