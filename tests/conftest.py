"""Pytest configuration helpers for the pipeline compiler test suite."""

import os
import sys
from pathlib import Path

import pytest

# Settings are cached on first import, so the environment must be fixed first.
os.environ["FASTAPI_ENV"] = "testing"
os.environ["PROJECT_STORAGE_TYPE"] = "memory"

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from backend.config import get_settings  # noqa: E402
from backend.dependencies import get_project_store  # noqa: E402
from backend.projects.memory import InMemoryProjectStore  # noqa: E402
from pipeline_compiler import Edge, Node  # noqa: E402

# TestClient sends Host: testserver, which TrustedHostMiddleware must accept.
_settings = get_settings()
if "testserver" not in _settings.ALLOWED_HOSTS:
    _settings.ALLOWED_HOSTS.append("testserver")


def _node(node_id, node_type, **configuration):
    return Node(id=node_id, type=node_type, configuration=configuration)


def _edge(source, target):
    return Edge(source=source, target=target)


@pytest.fixture
def project_store():
    return InMemoryProjectStore()


@pytest.fixture
def app(project_store):
    from backend.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_project_store] = lambda: project_store
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def full_pipeline():
    """A complete ingest -> ... -> deployment chain."""
    nodes = [
        _node("ingest", "ingestNode", sourceType="CSV", filePath="data/train.csv", targetColumn="label"),
        _node("prep", "preprocessNode"),
        _node("split", "dataSplitNode", trainSize=0.8, testSize=0.2),
        _node("select", "modelSelectionNode", modelName="Random Forest"),
        _node("train", "trainingNode"),
        _node("eval", "evaluationNode"),
        _node("deploy", "deploymentNode"),
    ]
    edges = [
        _edge("ingest", "prep"),
        _edge("prep", "split"),
        _edge("split", "select"),
        _edge("select", "train"),
        _edge("train", "eval"),
        _edge("eval", "deploy"),
    ]
    return nodes, edges
