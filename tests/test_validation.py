from pipeline_compiler import Edge, Node, Severity, generate, sequence, validate


def _node(node_id, node_type, **configuration):
    return Node(id=node_id, type=node_type, configuration=configuration)


def test_ingest_to_split_end_to_end():
    nodes = [
        _node("ingest", "ingestNode", sourceType="CSV"),
        _node("split", "dataSplitNode", trainSize=0.8, testSize=0.2),
    ]
    edges = [Edge(source="ingest", target="split")]

    assert [node.id for node in sequence(nodes, edges)] == ["ingest", "split"]

    report = validate(nodes, edges)
    assert report.overall_valid is True
    assert report.errors == []
    assert "Pipeline has no model development nodes" in [w.message for w in report.warnings]

    source = generate(nodes, edges).full_source
    csv_at = source.index("pd.read_csv(")
    split_at = source.index("train_test_split(\n")
    assert csv_at < split_at
    assert "train_size=0.8," in source
    assert "test_size=0.2," in source


def test_dangling_edge_reports_one_error():
    nodes = [_node("ingest", "ingestNode")]
    edge = Edge(source="ingest", target="ghost")

    report = validate(nodes, [edge])

    assert report.overall_valid is False
    assert len(report.errors) == 1
    assert report.errors[0].message == "Invalid connection: node not found"
    assert report.errors[0].suggestion == "Remove the connection or restore the missing node"
    assert report.per_edge_result[edge.id].severity == Severity.ERROR


def test_per_edge_results_follow_compatibility(full_pipeline):
    nodes, edges = full_pipeline

    report = validate(nodes, edges)

    assert set(report.per_edge_result) == {edge.id for edge in edges}
    eval_to_deploy = report.per_edge_result["e-eval-deploy"]
    assert eval_to_deploy.severity == Severity.WARNING
    assert eval_to_deploy.suggestion == "Ensure model performance is satisfactory before deployment"
    assert report.per_edge_result["e-ingest-prep"].severity == Severity.VALID
    assert report.overall_valid is True


def test_validation_is_idempotent(full_pipeline):
    nodes, edges = full_pipeline
    snapshot = [node.model_copy(deep=True) for node in nodes]

    first = validate(nodes, edges)
    second = validate(nodes, edges)

    assert first == second
    assert nodes == snapshot


def test_training_without_split_is_flagged_on_the_node():
    nodes = [
        _node("ingest", "ingestNode"),
        _node("select", "modelSelectionNode"),
        _node("train", "trainingNode"),
    ]
    edges = [Edge(source="select", target="train")]

    report = validate(nodes, edges)

    messages = [result.message for result in report.per_node_results["train"]]
    assert messages == ["Training node requires a Data Split node before it"]
    assert "Training node requires a Data Split node before it" in [e.message for e in report.errors]
    assert report.overall_valid is False


def test_node_rules_see_default_configuration():
    nodes = [
        _node("ingest", "ingestNode"),
        _node("prep", "preprocessNode"),
        _node("select", "modelSelectionNode", modelType="Tree"),
    ]
    edges = [Edge(source="ingest", target="prep")]

    report = validate(nodes, edges)

    assert [r.message for r in report.per_node_results["prep"]] == [
        "Tree-based models typically don't require feature scaling"
    ]


def test_split_sizes_must_add_up():
    nodes = [_node("ingest", "ingestNode"), _node("split", "dataSplitNode", trainSize=0.6, testSize=0.3)]
    edges = [Edge(source="ingest", target="split")]

    report = validate(nodes, edges)

    assert "Train and test sizes should sum to 1.0" in [w.message for w in report.warnings]


def test_split_with_validation_share_adds_up():
    nodes = [
        _node("ingest", "ingestNode"),
        _node("split", "dataSplitNode", trainSize=0.7, testSize=0.2, validationSize=0.1),
    ]
    edges = [Edge(source="ingest", target="split")]

    assert "split" not in validate(nodes, edges).per_node_results


def test_model_task_mismatch_warning():
    nodes = [
        _node("ingest", "ingestNode"),
        _node("select", "modelSelectionNode", modelName="Logistic Regression", taskType="Regression"),
    ]

    report = validate(nodes, [])

    assert report.per_node_results["select"][0].message == (
        "Logistic Regression is for classification, not regression tasks"
    )


def test_unknown_node_types_do_not_break_validation():
    nodes = [_node("ingest", "ingestNode"), _node("custom", "customNode")]
    edges = [Edge(source="ingest", target="custom")]

    report = validate(nodes, edges)

    assert report.per_edge_result["e-ingest-custom"].message == "Connection allowed"
    assert "custom" not in report.per_node_results


def test_empty_pipeline_reports_missing_phases():
    report = validate([], [])

    assert report.overall_valid is False
    assert [e.message for e in report.errors] == ["Pipeline must include at least one data processing node"]
