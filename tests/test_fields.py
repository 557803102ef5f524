import pytest

from pipeline_compiler import InvalidConfigurationError, apply_configuration, default_configuration, validate_configuration
from pipeline_compiler.config_schema import visible_fields
from pipeline_compiler.fields import DependsOn, FieldDescriptor, field_defaults, make_option


def test_depends_on_matches_single_value_and_lists():
    assert DependsOn("sourceType", "CSV").is_satisfied({"sourceType": "CSV"})
    assert not DependsOn("sourceType", "CSV").is_satisfied({"sourceType": "SQL"})
    assert DependsOn("sourceType", ("CSV", "JSON")).is_satisfied({"sourceType": "JSON"})
    assert DependsOn("crossValidation", True).to_dict() == {"key": "crossValidation", "value": True}


def test_check_reports_type_and_range_issues():
    slider = FieldDescriptor(key="cvFolds", label="CV Folds", kind="slider", minimum=3, maximum=10)
    assert slider.check(5) is None
    assert slider.check(2) == "CV Folds must be at least 3"
    assert slider.check(11) == "CV Folds must be at most 10"
    assert slider.check(True) == "CV Folds must be a number"

    select = FieldDescriptor(
        key="scaling", label="Scaling", kind="select", options=(make_option("None"), make_option("Standard"))
    )
    assert select.check("Robust") == "Scaling must be one of: None, Standard"

    required = FieldDescriptor(key="name", label="Name", kind="text", required=True)
    assert required.check("") == "Name is required"


def test_to_dict_uses_editor_keys():
    field = FieldDescriptor(
        key="cvFolds",
        label="CV Folds",
        kind="slider",
        default=5,
        minimum=3,
        maximum=10,
        step=1,
        depends_on=DependsOn("crossValidation", True),
    )

    payload = field.to_dict()

    assert payload["type"] == "slider"
    assert (payload["min"], payload["max"], payload["step"]) == (3, 10, 1)
    assert payload["dependsOn"] == {"key": "crossValidation", "value": True}


def test_field_defaults_prefer_the_visible_variant():
    fields = (
        FieldDescriptor(key="mode", label="Mode", kind="select", default="b"),
        FieldDescriptor(key="value", label="Value", kind="text", default="for-a", depends_on=DependsOn("mode", "a")),
        FieldDescriptor(key="value", label="Value", kind="text", default="for-b", depends_on=DependsOn("mode", "b")),
    )

    assert field_defaults(fields) == {"mode": "b", "value": "for-b"}


def test_default_configuration_is_a_fresh_copy():
    first = default_configuration("evaluationNode")
    first["metrics"].append("MCC")

    second = default_configuration("evaluation")
    assert second["metrics"] == ["Accuracy", "F1", "ROC-AUC"]
    assert second["label"] == "Evaluation"


def test_default_configuration_rejects_unknown_types():
    with pytest.raises(InvalidConfigurationError):
        default_configuration("customNode")


def test_visible_fields_follow_dependencies():
    keys = [field.key for field in visible_fields("ingestNode", {"sourceType": "SQL"})]

    assert "connectionString" in keys
    assert "query" in keys
    assert "filePath" not in keys
    assert "delimiter" not in keys


def test_hidden_fields_are_not_checked():
    assert validate_configuration("trainingNode", {"crossValidation": False, "cvFolds": 99}) == []
    assert validate_configuration("trainingNode", {"crossValidation": True, "cvFolds": 99}) == [
        "CV Folds (k) must be at most 10"
    ]


def test_unknown_type_is_reported():
    assert validate_configuration("customNode", {}) == ["Unknown node type: customNode"]


def test_apply_configuration_merges_updates():
    merged = apply_configuration("dataSplitNode", {"trainSize": 0.7}, {"testSize": 0.3, "stratify": True})

    assert merged["trainSize"] == 0.7
    assert merged["testSize"] == 0.3
    assert merged["stratify"] is True
    assert merged["label"] == "Data Split"


def test_apply_configuration_resets_stale_dependent_values():
    current = default_configuration("evaluationNode")

    merged = apply_configuration("evaluationNode", current, {"evaluationType": "Regression"})

    assert merged["metrics"] == ["MAE", "RMSE", "R2"]


def test_apply_configuration_rejects_bad_updates():
    with pytest.raises(InvalidConfigurationError) as excinfo:
        apply_configuration("evaluationNode", None, {"evaluationType": "Regression", "metrics": ["Accuracy"]})

    assert excinfo.value.node_type == "evaluationNode"
    assert excinfo.value.issues == ["Metrics has unsupported values: Accuracy"]


def test_apply_configuration_does_not_touch_inputs():
    current = {"dropColumns": ["id"]}

    merged = apply_configuration("preprocessNode", current, {"scaling": "MinMax"})
    merged["dropColumns"].append("name")

    assert current == {"dropColumns": ["id"]}
