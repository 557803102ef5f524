from typing import Any, Dict, List, Optional


class PipelineCompilerException(Exception):
    """Base exception for pipeline service errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)


class ProjectNotFoundError(PipelineCompilerException):
    """Raised when a stored project does not exist."""

    def __init__(self, project_id: str):
        super().__init__(
            f"Project not found: {project_id}",
            details={"project_id": project_id},
            status_code=404,
        )


class NodeTypeNotFoundError(PipelineCompilerException):
    """Raised when a node type is not registered."""

    def __init__(self, node_type: str):
        super().__init__(
            f"Unknown node type: {node_type}",
            details={"node_type": node_type},
            status_code=404,
        )


class ConfigurationRejectedError(PipelineCompilerException):
    """Raised when a node configuration update does not fit its fields."""

    def __init__(self, node_type: str, issues: List[str]):
        super().__init__(
            f"Invalid configuration for {node_type}",
            details={"node_type": node_type, "issues": list(issues)},
            status_code=422,
        )


class ProjectStoreError(PipelineCompilerException):
    """Raised when the project store cannot read or write."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details, status_code=500)
