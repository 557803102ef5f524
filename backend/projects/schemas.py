from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from backend.utils.datetime import ensure_utc, utcnow
from pipeline_compiler import Edge, Node


class ProjectBase(BaseModel):
    name: Optional[str] = None
    description: str = ""
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)


class ProjectCreate(ProjectBase):
    user_id: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    nodes: Optional[List[Node]] = None
    edges: Optional[List[Edge]] = None


class Project(ProjectBase):
    """A stored pipeline graph owned by one user."""

    id: str
    name: str
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class NodeCreate(BaseModel):
    type: str
    configuration: Dict[str, Any] = Field(default_factory=dict)
