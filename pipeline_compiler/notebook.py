"""Jupyter notebook export built from the generator's structured output."""

import copy
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from .codegen import generate
from .constants import NOTEBOOK_EXTENSION
from .registry import NodeRegistry, default_registry
from .schemas import Edge, Node
from .sequencer import sequence

DEFAULT_PROJECT_NAME = "ML Pipeline"

NOTEBOOK_METADATA: Dict[str, Any] = {
    "kernelspec": {
        "display_name": "Python 3",
        "language": "python",
        "name": "python3",
    },
    "language_info": {
        "codemirror_mode": {"name": "ipython", "version": 3},
        "file_extension": ".py",
        "mimetype": "text/x-python",
        "name": "python",
        "nbconvert_exporter": "python",
        "pygments_lexer": "ipython3",
    },
}


def notebook_filename(project_name: Optional[str]) -> str:
    """``"My Project"`` -> ``"my_project.ipynb"``."""
    name = re.sub(r"\s+", "_", (project_name or DEFAULT_PROJECT_NAME).strip()).lower()
    return f"{name or 'pipeline'}{NOTEBOOK_EXTENSION}"


def _source_lines(text: str) -> List[str]:
    # nbformat stores cell source as lines that keep their trailing newline
    lines = text.split("\n")
    return [line + "\n" for line in lines[:-1]] + [lines[-1]]


def markdown_cell(text: str) -> Dict[str, Any]:
    return {"cell_type": "markdown", "metadata": {}, "source": _source_lines(text)}


def code_cell(text: str) -> Dict[str, Any]:
    return {
        "cell_type": "code",
        "execution_count": None,
        "metadata": {},
        "outputs": [],
        "source": _source_lines(text),
    }


def build_notebook(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    project_name: Optional[str] = None,
    registry: Optional[NodeRegistry] = None,
    generated_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build an nbformat 4 notebook: a title cell, an imports cell, then a
    markdown heading and a code cell for each node that produced a body.
    """
    registry = registry if registry is not None else default_registry
    project_name = project_name or DEFAULT_PROJECT_NAME
    generated_at = generated_at or datetime.now()
    code = generate(nodes, edges, registry=registry)

    cells: List[Dict[str, Any]] = [
        markdown_cell(
            f"# {project_name}\n\n"
            "This notebook was generated from the ML Pipeline Visualizer.\n\n"
            f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}"
        ),
        code_cell("\n".join(["# Import required libraries", *code.import_lines])),
    ]

    index = 0
    for node in sequence(nodes, edges):
        body = code.per_node_source.get(node.id)
        if not body:
            continue
        index += 1
        cells.append(
            markdown_cell(
                f"## {index}. {registry.label_of(node)}\n\n"
                f"Category: {registry.category_of(node) or 'unknown'}"
            )
        )
        cells.append(code_cell(body))

    return {
        "cells": cells,
        "metadata": copy.deepcopy(NOTEBOOK_METADATA),
        "nbformat": 4,
        "nbformat_minor": 4,
    }
