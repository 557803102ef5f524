from pipeline_compiler import Edge, Node, Severity, check_structure


def _node(node_id, node_type, **configuration):
    return Node(id=node_id, type=node_type, configuration=configuration)


def _errors(results):
    return [result for result in results if result.severity == Severity.ERROR]


def _warnings(results):
    return [result for result in results if result.severity == Severity.WARNING]


def test_duplicate_ingest_produces_one_cardinality_error():
    nodes = [
        _node("ingest-1", "ingestNode"),
        _node("ingest-2", "ingestNode"),
        _node("prep", "preprocessNode"),
    ]
    edges = [Edge(source="ingest-1", target="prep"), Edge(source="ingest-2", target="prep")]

    errors = _errors(check_structure(nodes, edges))

    assert len(errors) == 1
    assert "ingestNode" in errors[0].message
    assert errors[0].message == "Only one Data Ingest node (ingestNode) is allowed per pipeline"


def test_single_ingest_has_no_cardinality_error():
    nodes = [_node("ingest", "ingestNode"), _node("prep", "preprocessNode")]
    edges = [Edge(source="ingest", target="prep")]

    assert _errors(check_structure(nodes, edges)) == []


def test_duplicate_data_split_is_also_limited():
    nodes = [_node("ingest", "ingestNode"), _node("s1", "dataSplitNode"), _node("s2", "dataSplitNode")]
    edges = [Edge(source="ingest", target="s1"), Edge(source="ingest", target="s2")]

    errors = _errors(check_structure(nodes, edges))

    assert [error.message for error in errors] == [
        "Only one Data Split node (dataSplitNode) is allowed per pipeline"
    ]


def test_missing_data_phase_is_an_error():
    results = check_structure([_node("train", "trainingNode")], [])

    errors = _errors(results)
    assert len(errors) == 1
    assert errors[0].message == "Pipeline must include at least one data processing node"


def test_missing_model_phase_is_a_warning():
    results = check_structure([_node("ingest", "ingestNode")], [])

    assert _errors(results) == []
    assert [w.message for w in _warnings(results)] == ["Pipeline has no model development nodes"]


def test_disconnected_nodes_are_counted():
    nodes = [
        _node("ingest", "ingestNode"),
        _node("prep", "preprocessNode"),
        _node("lonely", "explorationNode"),
        _node("train", "trainingNode"),
    ]
    edges = [Edge(source="ingest", target="prep")]

    messages = [w.message for w in _warnings(check_structure(nodes, edges))]

    assert "2 disconnected node(s)" in messages


def test_single_node_is_never_disconnected():
    messages = [r.message for r in check_structure([_node("ingest", "ingestNode")], [])]
    assert not any("disconnected" in message for message in messages)


def test_cycle_is_an_error():
    nodes = [_node("ingest", "ingestNode"), _node("a", "preprocessNode"), _node("b", "preprocessNode")]
    edges = [
        Edge(source="ingest", target="a"),
        Edge(source="a", target="b"),
        Edge(source="b", target="a"),
    ]

    messages = [error.message for error in _errors(check_structure(nodes, edges))]

    assert messages == ["Pipeline contains circular dependencies"]


def test_category_falls_back_to_registry():
    nodes = [Node(id="ingest", type="dataIngest", category="")]

    assert _errors(check_structure(nodes, [])) == []
