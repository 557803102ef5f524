from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from backend.dependencies import get_project_service
from pipeline_compiler import GeneratedCode, Node, PipelineValidation

from .schemas import NodeCreate, Project, ProjectCreate, ProjectUpdate
from .service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("/", response_model=List[Project])
async def list_projects(
    user_id: Optional[str] = Query(None),
    service: ProjectService = Depends(get_project_service),
):
    """
    Lists stored projects, newest first.
    """
    return service.list_projects(user_id)


@router.post("/", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(payload: ProjectCreate, service: ProjectService = Depends(get_project_service)):
    return service.create_project(payload)


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    return service.get_project(project_id)


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
):
    return service.update_project(project_id, payload)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    service.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/nodes", response_model=Node, status_code=status.HTTP_201_CREATED)
async def add_node(
    project_id: str,
    payload: NodeCreate,
    service: ProjectService = Depends(get_project_service),
):
    """
    Adds a node with a generated id and the type's default configuration.
    """
    return service.add_node(project_id, payload)


@router.delete("/{project_id}/nodes/{node_id}", response_model=Project)
async def remove_node(
    project_id: str,
    node_id: str,
    service: ProjectService = Depends(get_project_service),
):
    """
    Removes a node together with every edge that touches it.
    """
    return service.remove_node(project_id, node_id)


@router.get("/{project_id}/validate", response_model=PipelineValidation)
async def validate_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    return service.validate_project(project_id)


@router.get("/{project_id}/generate", response_model=GeneratedCode)
async def generate_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    return service.generate_project(project_id)
