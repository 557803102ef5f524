import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from backend.dependencies import get_pipeline_service
from backend.utils.logging_utils import log_pipeline_action
from pipeline_compiler import SCRIPT_FILENAME, GeneratedCode, PipelineValidation, notebook_filename

from .schemas import (
    ConfigurationResponse,
    ConfigurationUpdate,
    GenerateRequest,
    NodeTypeInfo,
    NotebookRequest,
    PipelineRequest,
)
from .service import PipelineService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pipeline", tags=["Pipeline"])


@router.get("/nodes", response_model=List[NodeTypeInfo])
async def list_node_types(service: PipelineService = Depends(get_pipeline_service)):
    """
    Returns every registered node type with its fields and defaults.
    """
    return service.catalog()


@router.get("/nodes/{node_type}", response_model=NodeTypeInfo)
async def get_node_type(node_type: str, service: PipelineService = Depends(get_pipeline_service)):
    return service.node_type(node_type).describe()


@router.post("/nodes/{node_type}/config", response_model=ConfigurationResponse)
async def configure_node(
    node_type: str,
    request: ConfigurationUpdate,
    service: PipelineService = Depends(get_pipeline_service),
):
    """
    Merges a configuration update over the current values and checks it
    against the node type's fields. Rejected updates return 422 with the issues.
    """
    return service.configure(node_type, request.current, request.updates)


@router.post("/validate", response_model=PipelineValidation)
async def validate_pipeline(
    request: PipelineRequest, service: PipelineService = Depends(get_pipeline_service)
):
    return service.validate(request.nodes, request.edges)


@router.post("/generate", response_model=GeneratedCode)
async def generate_code(
    request: GenerateRequest, service: PipelineService = Depends(get_pipeline_service)
):
    return service.generate(request.nodes, request.edges, include_labels=request.include_labels)


@router.post("/generate/download")
async def download_script(
    request: GenerateRequest, service: PipelineService = Depends(get_pipeline_service)
):
    """
    Returns the generated script as a ``pipeline.py`` attachment.
    """
    code = service.generate(request.nodes, request.edges, include_labels=request.include_labels)
    log_pipeline_action("download_script", details=f"{len(request.nodes)} node(s)")
    return Response(
        content=code.full_source,
        media_type="text/x-python",
        headers={"Content-Disposition": f'attachment; filename="{SCRIPT_FILENAME}"'},
    )


@router.post("/export/notebook")
async def export_notebook(
    request: NotebookRequest, service: PipelineService = Depends(get_pipeline_service)
):
    """
    Returns the pipeline as a Jupyter notebook attachment named after the project.
    """
    notebook = service.notebook(request.nodes, request.edges, project_name=request.project_name)
    filename = notebook_filename(request.project_name)
    log_pipeline_action("export_notebook", details=f"{filename}, {len(notebook['cells'])} cell(s)")
    return JSONResponse(
        content=notebook,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
