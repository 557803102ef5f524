"""Field descriptors for node configuration forms.

A node type declares an ordered tuple of :class:`FieldDescriptor`. Fields may
carry a :class:`DependsOn` condition, which makes them visible only while
another key of the same configuration holds an expected value. Several
descriptors may share one key when their conditions are mutually exclusive
(for example evaluation metrics per evaluation type).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

FieldKind = Literal[
    "text", "textarea", "select", "number", "boolean", "multiselect", "slider", "tags"
]


@dataclass(frozen=True)
class FieldOption:
    value: Any
    label: str


def make_option(value: Any, label: Optional[str] = None) -> FieldOption:
    return FieldOption(value=value, label=label or str(value))


@dataclass(frozen=True)
class DependsOn:
    key: str
    expected: Any

    def is_satisfied(self, config: Mapping[str, Any]) -> bool:
        current = config.get(self.key)
        if isinstance(self.expected, (list, tuple, set, frozenset)):
            return current in self.expected
        return current == self.expected

    def to_dict(self) -> Dict[str, Any]:
        expected = self.expected
        if isinstance(expected, (tuple, set, frozenset)):
            expected = list(expected)
        return {"key": self.key, "value": expected}


@dataclass(frozen=True)
class FieldDescriptor:
    key: str
    label: str
    kind: FieldKind
    default: Any = None
    options: Tuple[FieldOption, ...] = ()
    required: bool = False
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    step: Optional[float] = None
    description: str = ""
    placeholder: str = ""
    depends_on: Optional[DependsOn] = None

    def is_visible(self, config: Mapping[str, Any]) -> bool:
        return self.depends_on is None or self.depends_on.is_satisfied(config)

    def option_values(self) -> List[Any]:
        return [option.value for option in self.options]

    def check(self, value: Any) -> Optional[str]:
        """Return a human readable issue for ``value``, or None when it fits."""
        if value is None or value == "" or value == []:
            if self.required:
                return f"{self.label} is required"
            return None

        if self.kind == "boolean":
            if not isinstance(value, bool):
                return f"{self.label} must be true or false"
            return None

        if self.kind in ("number", "slider"):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"{self.label} must be a number"
            if self.minimum is not None and value < self.minimum:
                return f"{self.label} must be at least {self.minimum:g}"
            if self.maximum is not None and value > self.maximum:
                return f"{self.label} must be at most {self.maximum:g}"
            return None

        if self.kind == "select":
            allowed = self.option_values()
            if allowed and value not in allowed:
                return f"{self.label} must be one of: {', '.join(str(v) for v in allowed)}"
            return None

        if self.kind in ("multiselect", "tags"):
            if not isinstance(value, (list, tuple)):
                return f"{self.label} must be a list"
            if self.kind == "multiselect":
                allowed = self.option_values()
                unknown = [item for item in value if item not in allowed]
                if unknown:
                    return f"{self.label} has unsupported values: {', '.join(str(v) for v in unknown)}"
            return None

        if not isinstance(value, str):
            return f"{self.label} must be text"
        return None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "key": self.key,
            "label": self.label,
            "type": self.kind,
            "default": self.default,
            "required": self.required,
        }
        if self.options:
            payload["options"] = [{"value": o.value, "label": o.label} for o in self.options]
        if self.minimum is not None:
            payload["min"] = self.minimum
        if self.maximum is not None:
            payload["max"] = self.maximum
        if self.step is not None:
            payload["step"] = self.step
        if self.description:
            payload["description"] = self.description
        if self.placeholder:
            payload["placeholder"] = self.placeholder
        if self.depends_on is not None:
            payload["dependsOn"] = self.depends_on.to_dict()
        return payload


def field_defaults(fields: Sequence[FieldDescriptor]) -> Dict[str, Any]:
    """Defaults for every key, preferring the descriptor visible under the defaults themselves."""
    defaults: Dict[str, Any] = {}
    for field in fields:
        if field.key not in defaults and field.is_visible(defaults):
            defaults[field.key] = _copy_default(field.default)
    for field in fields:
        if field.key not in defaults:
            defaults[field.key] = _copy_default(field.default)
    return defaults


def _copy_default(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return list(value)
    return value
