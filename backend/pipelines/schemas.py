from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from pipeline_compiler import Edge, Node


class PipelineRequest(BaseModel):
    """A node collection and an edge collection as sent by the editor."""

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)


class GenerateRequest(PipelineRequest):
    include_labels: bool = True


class NotebookRequest(PipelineRequest):
    project_name: Optional[str] = None


class ConfigurationUpdate(BaseModel):
    current: Dict[str, Any] = Field(default_factory=dict)
    updates: Dict[str, Any] = Field(default_factory=dict)


class ConfigurationResponse(BaseModel):
    type: str
    configuration: Dict[str, Any]
    visible_fields: List[str]


class FieldOptionInfo(BaseModel):
    value: Any
    label: str


class DependsOnInfo(BaseModel):
    key: str
    value: Any


class NodeFieldInfo(BaseModel):
    key: str
    label: str
    type: str
    default: Any = None
    required: bool = False
    options: Optional[List[FieldOptionInfo]] = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    description: Optional[str] = None
    placeholder: Optional[str] = None
    dependsOn: Optional[DependsOnInfo] = None


class NodeTypeInfo(BaseModel):
    type: str
    label: str
    category: str
    description: str = ""
    max_instances: Optional[int] = None
    default_configuration: Dict[str, Any]
    fields: List[NodeFieldInfo]
