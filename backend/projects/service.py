import logging
import uuid
from typing import List, Optional

from backend.exceptions import ConfigurationRejectedError, NodeTypeNotFoundError
from backend.utils.datetime import utcnow
from backend.utils.logging_utils import log_pipeline_action
from pipeline_compiler import (
    GeneratedCode,
    InvalidConfigurationError,
    Node,
    NodeRegistry,
    PipelineValidation,
    apply_configuration,
    default_registry,
    generate,
    validate,
)
from pipeline_compiler.graph import generate_node_id, remove_node

from .schemas import NodeCreate, Project, ProjectCreate, ProjectUpdate
from .store import ProjectStore

logger = logging.getLogger(__name__)


class ProjectService:
    """Project workflows on top of an injected ProjectStore."""

    def __init__(
        self,
        store: ProjectStore,
        default_name: str = "ML Pipeline",
        default_user_id: str = "local",
        registry: Optional[NodeRegistry] = None,
    ):
        self.store = store
        self.default_name = default_name
        self.default_user_id = default_user_id
        self.registry = registry if registry is not None else default_registry

    def list_projects(self, user_id: Optional[str] = None) -> List[Project]:
        return self.store.list(user_id)

    def get_project(self, project_id: str) -> Project:
        return self.store.load(project_id)

    def create_project(self, payload: ProjectCreate) -> Project:
        project = Project(
            id=uuid.uuid4().hex,
            name=(payload.name or "").strip() or self.default_name,
            description=payload.description,
            user_id=payload.user_id or self.default_user_id,
            nodes=payload.nodes,
            edges=payload.edges,
        )
        saved = self.store.save(project)
        log_pipeline_action("create_project", details=f"{saved.id} ({saved.name})")
        return saved

    def update_project(self, project_id: str, payload: ProjectUpdate) -> Project:
        project = self.store.load(project_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            project.name = changes["name"].strip() or project.name
        if "description" in changes:
            project.description = changes["description"]
        if payload.nodes is not None:
            project.nodes = payload.nodes
        if payload.edges is not None:
            project.edges = payload.edges
        project.updated_at = utcnow()
        saved = self.store.save(project)
        log_pipeline_action("update_project", details=saved.id)
        return saved

    def delete_project(self, project_id: str) -> None:
        self.store.delete(project_id)
        log_pipeline_action("delete_project", details=project_id)

    def add_node(self, project_id: str, payload: NodeCreate) -> Node:
        """Append a node with a fresh id and its type's default configuration."""
        descriptor = self.registry.lookup(payload.type)
        if descriptor is None:
            raise NodeTypeNotFoundError(payload.type)

        project = self.store.load(project_id)
        try:
            configuration = apply_configuration(
                descriptor.type, None, payload.configuration, self.registry
            )
        except InvalidConfigurationError as exc:
            raise ConfigurationRejectedError(exc.node_type, exc.issues) from exc

        node = Node(
            id=generate_node_id(descriptor.type, (n.id for n in project.nodes)),
            type=descriptor.type,
            category=descriptor.category.value,
            configuration=configuration,
        )
        project.nodes.append(node)
        project.updated_at = utcnow()
        self.store.save(project)
        log_pipeline_action("add_node", details=f"{node.id} -> project {project_id}")
        return node

    def remove_node(self, project_id: str, node_id: str) -> Project:
        project = self.store.load(project_id)
        nodes, edges = remove_node(project.nodes, project.edges, node_id)
        if len(nodes) == len(project.nodes):
            logger.debug("Node %s not present in project %s", node_id, project_id)
        dropped = len(project.edges) - len(edges)
        project.nodes, project.edges = nodes, edges
        project.updated_at = utcnow()
        saved = self.store.save(project)
        log_pipeline_action("remove_node", details=f"{node_id} from {project_id}, {dropped} edge(s) dropped")
        return saved

    def validate_project(self, project_id: str) -> PipelineValidation:
        project = self.store.load(project_id)
        return validate(project.nodes, project.edges, self.registry)

    def generate_project(self, project_id: str) -> GeneratedCode:
        project = self.store.load(project_id)
        return generate(project.nodes, project.edges, self.registry)
