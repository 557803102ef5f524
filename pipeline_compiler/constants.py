from enum import Enum
from typing import Dict


class NodeCategory(str, Enum):
    DATA = "data"
    MODEL = "model"
    DEPLOYMENT = "deployment"


class Severity(str, Enum):
    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"


class NodeType(str, Enum):
    INGEST = "ingestNode"
    PREPROCESS = "preprocessNode"
    EXPLORATION = "explorationNode"
    FEATURE_ENGINEERING = "featureEngineeringNode"
    DATA_SPLIT = "dataSplitNode"
    MODEL_SELECTION = "modelSelectionNode"
    TRAINING = "trainingNode"
    EVALUATION = "evaluationNode"
    DEPLOYMENT = "deploymentNode"


# Short identifiers accepted on input; everything downstream keys off NodeType values.
TYPE_ALIASES: Dict[str, NodeType] = {
    "dataIngest": NodeType.INGEST,
    "preprocess": NodeType.PREPROCESS,
    "exploration": NodeType.EXPLORATION,
    "featureEngineering": NodeType.FEATURE_ENGINEERING,
    "dataSplit": NodeType.DATA_SPLIT,
    "modelSelection": NodeType.MODEL_SELECTION,
    "training": NodeType.TRAINING,
    "evaluation": NodeType.EVALUATION,
    "deployment": NodeType.DEPLOYMENT,
}

PHASE_ORDER: Dict[str, int] = {
    NodeCategory.DATA.value: 0,
    NodeCategory.MODEL.value: 1,
    NodeCategory.DEPLOYMENT.value: 2,
}

PHASE_NAMES: Dict[int, str] = {
    0: "data processing",
    1: "model development",
    2: "deployment",
}

EMPTY_PIPELINE_PLACEHOLDER = "# Add nodes to your pipeline to generate code"
CODE_BANNER = "# ML Pipeline Generated Code\n# Generated from pipeline visualizer"
SCRIPT_FILENAME = "pipeline.py"
NOTEBOOK_EXTENSION = ".ipynb"
