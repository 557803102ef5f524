"""Graph and result models shared by the compiler and the API layer."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import Severity, TYPE_ALIASES


def canonical_type(node_type: Any) -> str:
    """Map short aliases (``dataIngest``) onto full node type identifiers (``ingestNode``)."""
    if isinstance(node_type, Enum):
        node_type = node_type.value
    if not node_type:
        return ""
    node_type = str(node_type)
    alias = TYPE_ALIASES.get(node_type)
    return alias.value if alias is not None else node_type


class Node(BaseModel):
    """A placed pipeline stage. ``configuration`` is read-only inside the compiler."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    category: str = ""
    configuration: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("configuration", "config", "data"),
    )

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        return canonical_type(v)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        if isinstance(v, Enum):
            v = v.value
        return str(v).lower() if v else ""

    @property
    def label(self) -> Optional[str]:
        value = self.configuration.get("label")
        return str(value) if value else None


class Edge(BaseModel):
    id: str = ""
    source: str
    target: str

    @model_validator(mode="after")
    def default_id(self):
        if not self.id:
            self.id = f"e-{self.source}-{self.target}"
        return self


class Pipeline(BaseModel):
    """Snapshot of a node collection and an edge collection."""

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    def node_map(self) -> Dict[str, Node]:
        mapping: Dict[str, Node] = {}
        for node in self.nodes:
            mapping.setdefault(node.id, node)
        return mapping

    def nodes_of_type(self, node_type: Any) -> List[Node]:
        wanted = canonical_type(node_type)
        return [node for node in self.nodes if node.type == wanted]

    def has_type(self, node_type: Any) -> bool:
        return bool(self.nodes_of_type(node_type))


class ValidationResult(BaseModel):
    severity: Severity
    message: str
    suggestion: Optional[str] = None

    @classmethod
    def valid(cls, message: str) -> "ValidationResult":
        return cls(severity=Severity.VALID, message=message)

    @classmethod
    def warning(cls, message: str, suggestion: Optional[str] = None) -> "ValidationResult":
        return cls(severity=Severity.WARNING, message=message, suggestion=suggestion)

    @classmethod
    def error(cls, message: str, suggestion: Optional[str] = None) -> "ValidationResult":
        return cls(severity=Severity.ERROR, message=message, suggestion=suggestion)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING


class PipelineValidation(BaseModel):
    overall_valid: bool
    errors: List[ValidationResult] = Field(default_factory=list)
    warnings: List[ValidationResult] = Field(default_factory=list)
    per_edge_result: Dict[str, ValidationResult] = Field(default_factory=dict)
    per_node_results: Dict[str, List[ValidationResult]] = Field(default_factory=dict)


class GeneratedCode(BaseModel):
    full_source: str
    import_lines: List[str] = Field(default_factory=list)
    per_node_source: Dict[str, str] = Field(default_factory=dict)
