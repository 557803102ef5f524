from .base import BaseNodeType, NodeRule
from .data import DataSplitNode, ExplorationNode, FeatureEngineeringNode, IngestNode, PreprocessNode
from .deployment import DeploymentNode
from .model import EvaluationNode, ModelSelectionNode, TrainingNode

__all__ = [
    "BaseNodeType",
    "NodeRule",
    "IngestNode",
    "PreprocessNode",
    "ExplorationNode",
    "FeatureEngineeringNode",
    "DataSplitNode",
    "ModelSelectionNode",
    "TrainingNode",
    "EvaluationNode",
    "DeploymentNode",
]
