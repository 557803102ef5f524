"""Service exceptions and their JSON handlers."""

from .core import (
    ConfigurationRejectedError,
    NodeTypeNotFoundError,
    PipelineCompilerException,
    ProjectNotFoundError,
    ProjectStoreError,
)

__all__ = [
    "PipelineCompilerException",
    "ProjectNotFoundError",
    "NodeTypeNotFoundError",
    "ConfigurationRejectedError",
    "ProjectStoreError",
]
