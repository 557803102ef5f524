from typing import List, Optional


class InvalidConfigurationError(ValueError):
    """Raised when a configuration update does not fit the node type's fields."""

    def __init__(self, node_type: str, issues: List[str], message: Optional[str] = None):
        self.node_type = node_type
        self.issues = list(issues)
        super().__init__(message or f"Invalid configuration for {node_type}: {'; '.join(self.issues)}")
