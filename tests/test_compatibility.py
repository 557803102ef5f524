import pytest

from pipeline_compiler import Severity, check_connection
from pipeline_compiler.compatibility import COMPATIBILITY_RULES


def test_backward_edge_is_a_warning_regardless_of_types():
    for source in ("modelSelectionNode", "trainingNode", "evaluationNode"):
        for target in ("ingestNode", "preprocessNode", "dataSplitNode"):
            result = check_connection(source, target)
            assert result.severity == Severity.WARNING
            assert result.message == "Connecting backwards in the pipeline flow"
            assert result.suggestion == "Standard flow is: Data → Model → Deployment"


def test_backward_edge_uses_explicit_categories():
    result = check_connection("someCustomNode", "otherCustomNode", "model", "data")
    assert result.severity == Severity.WARNING
    assert "backwards" in result.message


def test_skipping_a_phase_names_the_skipped_phase():
    result = check_connection("dataIngest", "deployment")

    assert result.severity == Severity.WARNING
    assert result.message == "Skipping model development phase"
    assert result.suggestion == "Consider adding intermediate steps for better results"


def test_adjacent_phase_type_outside_allowed_list_is_an_error():
    result = check_connection("dataIngest", "evaluation")

    assert result.severity == Severity.ERROR
    assert result.message == "ingestNode cannot connect to evaluationNode"
    assert result.suggestion == (
        "ingestNode can connect to: preprocessNode, explorationNode, featureEngineeringNode, dataSplitNode"
    )


def test_same_phase_disallowed_connection_is_an_error():
    result = check_connection("featureEngineeringNode", "preprocessNode")
    assert result.is_error


def test_warning_entry_uses_configured_suggestion():
    result = check_connection("ingestNode", "dataSplitNode")

    assert result.severity == Severity.WARNING
    assert result.message == "This connection may be suboptimal"
    assert result.suggestion == "Consider adding preprocessing before splitting data"


@pytest.mark.parametrize(
    "source,target",
    [
        ("ingestNode", "preprocessNode"),
        ("preprocessNode", "dataSplitNode"),
        ("dataSplitNode", "modelSelectionNode"),
        ("modelSelectionNode", "trainingNode"),
        ("trainingNode", "evaluationNode"),
    ],
)
def test_standard_flow_is_valid(source, target):
    result = check_connection(source, target)
    assert result.severity == Severity.VALID
    assert result.message == "Connection is valid"


def test_unknown_source_type_is_unconstrained():
    result = check_connection("customNode", "trainingNode")
    assert result.severity == Severity.VALID
    assert result.message == "Connection allowed"


def test_unregistered_target_is_unconstrained():
    result = check_connection("ingestNode", "mysteryNode")
    assert result.severity == Severity.VALID
    assert result.message == "Connection allowed"


def test_aliases_resolve_to_full_types():
    assert check_connection("dataIngest", "preprocess") == check_connection("ingestNode", "preprocessNode")


def test_table_targets_are_registered_types():
    from pipeline_compiler import default_registry

    for source, rule in COMPATIBILITY_RULES.items():
        assert source in default_registry
        for target in rule.allowed:
            assert target in default_registry
        assert set(rule.warnings) <= set(rule.allowed)
