"""Compiler core for visual ML pipelines: ordering, validation and code generation."""

from .codegen import generate
from .compatibility import check as check_connection
from .config_schema import apply_configuration, default_configuration, validate_configuration
from .constants import NodeCategory, NodeType, SCRIPT_FILENAME, Severity
from .exceptions import InvalidConfigurationError
from .notebook import build_notebook, notebook_filename
from .registry import NodeRegistry, default_registry, lookup
from .schemas import (
    Edge,
    GeneratedCode,
    Node,
    Pipeline,
    PipelineValidation,
    ValidationResult,
    canonical_type,
)
from .sequencer import sequence
from .structure import check_structure
from .validation import validate

__version__ = "0.1.0"

__all__ = [
    "Node",
    "Edge",
    "Pipeline",
    "ValidationResult",
    "PipelineValidation",
    "GeneratedCode",
    "NodeCategory",
    "NodeType",
    "Severity",
    "NodeRegistry",
    "default_registry",
    "lookup",
    "canonical_type",
    "sequence",
    "check_connection",
    "check_structure",
    "validate",
    "generate",
    "build_notebook",
    "notebook_filename",
    "SCRIPT_FILENAME",
    "default_configuration",
    "validate_configuration",
    "apply_configuration",
    "InvalidConfigurationError",
]
