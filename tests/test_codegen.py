import logging

import pytest

from pipeline_compiler import Edge, Node, NodeRegistry, generate, lookup
from pipeline_compiler.codegen import split_imports
from pipeline_compiler.constants import CODE_BANNER, EMPTY_PIPELINE_PLACEHOLDER
from pipeline_compiler.nodes import BaseNodeType


def _node(node_id, node_type, **configuration):
    return Node(id=node_id, type=node_type, configuration=configuration)


def test_empty_pipeline_returns_placeholder():
    code = generate([], [])

    assert code.full_source == EMPTY_PIPELINE_PLACEHOLDER
    assert code.import_lines == []
    assert code.per_node_source == {}


def test_shared_imports_appear_once_at_first_position():
    nodes = [
        _node("ingest", "ingestNode", sourceType="CSV"),
        _node("batch", "deploymentNode", deploymentType="Batch", monitoring=False),
    ]
    edges = [Edge(source="ingest", target="batch")]

    code = generate(nodes, edges)

    assert code.import_lines.count("import pandas as pd") == 1
    assert code.import_lines[0] == "import pandas as pd"
    assert code.full_source.count("import pandas as pd") == 1


def test_imports_are_hoisted_above_the_banner():
    nodes = [_node("ingest", "ingestNode"), _node("split", "dataSplitNode")]
    edges = [Edge(source="ingest", target="split")]

    code = generate(nodes, edges)
    source = code.full_source

    assert code.import_lines == [
        "import pandas as pd",
        "from sklearn.model_selection import train_test_split",
    ]
    assert source.startswith("import pandas as pd\nfrom sklearn.model_selection import train_test_split\n\n")
    assert source.index(CODE_BANNER) > source.index("train_test_split")
    for body in code.per_node_source.values():
        assert "import " not in body.splitlines()[0]


def test_sections_follow_sequencer_order_with_labels():
    nodes = [
        _node("split", "dataSplitNode", label="Holdout"),
        _node("ingest", "ingestNode"),
    ]
    edges = [Edge(source="ingest", target="split")]

    source = generate(nodes, edges).full_source

    assert source.index("# ── Data Ingest ──") < source.index("# ── Holdout ──")
    assert source.endswith("\n")


def test_labels_can_be_left_out():
    nodes = [_node("ingest", "ingestNode")]

    source = generate(nodes, [], include_labels=False).full_source

    assert "# ──" not in source


def test_unregistered_types_are_skipped():
    nodes = [_node("ingest", "ingestNode"), _node("custom", "customNode")]
    edges = [Edge(source="ingest", target="custom")]

    code = generate(nodes, edges)

    assert list(code.per_node_source) == ["ingest"]


def test_cycle_still_generates_in_input_order():
    nodes = [_node("prep", "preprocessNode"), _node("explore", "explorationNode")]
    edges = [Edge(source="prep", target="explore"), Edge(source="explore", target="prep")]

    code = generate(nodes, edges)

    assert list(code.per_node_source) == ["prep", "explore"]


def test_generation_is_deterministic(full_pipeline):
    nodes, edges = full_pipeline
    assert generate(nodes, edges) == generate(nodes, edges)


def test_split_imports_collapses_blank_runs():
    block = "import numpy as np\n\nx = 1\n\nimport pandas as pd\n\ny = 2\n\n"

    imports, body = split_imports(block)

    assert imports == ["import numpy as np", "import pandas as pd"]
    assert body == ["x = 1", "", "y = 2"]


def test_indented_imports_stay_in_the_body():
    imports, body = split_imports("def f():\n    import os\n    return os")

    assert imports == []
    assert body == ["def f():", "    import os", "    return os"]


@pytest.mark.parametrize(
    "node_type, configuration, expected",
    [
        ("preprocessNode", {"missingValues": 1}, "df = df.fillna(df.mean(numeric_only=True))"),
        ("explorationNode", {"edaType": ["Univariate"]}, "from ydata_profiling import ProfileReport"),
        ("modelSelectionNode", {"modelName": ["SVM"]}, "RandomForestClassifier("),
        ("deploymentNode", {"deploymentType": "REST API", "framework": {"name": "Flask"}}, "from fastapi import"),
    ],
)
def test_mistyped_select_values_fall_back_to_defaults(node_type, configuration, expected):
    code = generate([_node("n", node_type, **configuration)], [])

    assert expected in code.full_source
    assert "n" in code.per_node_source


class _FailingNode(BaseNodeType):
    type = "failingNode"
    label = "Failing"

    def generate_code(self, config):
        raise ValueError("template blew up")


def test_failing_template_skips_only_that_node(caplog):
    registry = NodeRegistry([lookup("ingestNode"), _FailingNode()])
    nodes = [_node("ingest", "ingestNode"), _node("broken", "failingNode")]
    edges = [Edge(source="ingest", target="broken")]

    with caplog.at_level(logging.WARNING, logger="pipeline_compiler.codegen"):
        code = generate(nodes, edges, registry=registry)

    assert list(code.per_node_source) == ["ingest"]
    assert "# ── Failing ──" not in code.full_source
    assert any("broken" in record.getMessage() for record in caplog.records)
