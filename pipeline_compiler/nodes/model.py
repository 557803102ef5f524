"""Model-phase node types: model selection, training, evaluation."""

from typing import List

from ..constants import NodeCategory, NodeType, Severity
from ..fields import DependsOn, FieldDescriptor, make_option
from .base import BaseNodeType, Config, NodeRule, choice_or, number_or

# modelName -> (classification import, constructor), (regression import, constructor)
_MODELS = {
    "Linear Regression": (
        ("from sklearn.linear_model import LinearRegression", "LinearRegression()"),
        ("from sklearn.linear_model import LinearRegression", "LinearRegression()"),
    ),
    "Logistic Regression": (
        ("from sklearn.linear_model import LogisticRegression", "LogisticRegression(random_state=42)"),
        ("from sklearn.linear_model import LogisticRegression", "LogisticRegression(random_state=42)"),
    ),
    "Decision Tree": (
        ("from sklearn.tree import DecisionTreeClassifier", "DecisionTreeClassifier(random_state=42)"),
        ("from sklearn.tree import DecisionTreeRegressor", "DecisionTreeRegressor(random_state=42)"),
    ),
    "Random Forest": (
        ("from sklearn.ensemble import RandomForestClassifier",
         "RandomForestClassifier(n_estimators=100, random_state=42)"),
        ("from sklearn.ensemble import RandomForestRegressor",
         "RandomForestRegressor(n_estimators=100, random_state=42)"),
    ),
    "SVM": (
        ("from sklearn.svm import SVC", "SVC(kernel='rbf', random_state=42)"),
        ("from sklearn.svm import SVR", "SVR(kernel='rbf')"),
    ),
    "KNN": (
        ("from sklearn.neighbors import KNeighborsClassifier", "KNeighborsClassifier(n_neighbors=5)"),
        ("from sklearn.neighbors import KNeighborsRegressor", "KNeighborsRegressor(n_neighbors=5)"),
    ),
}


class ModelSelectionNode(BaseNodeType):
    type = NodeType.MODEL_SELECTION.value
    label = "Model Selection"
    category = NodeCategory.MODEL
    description = "Choose ML algorithm"
    fields = (
        FieldDescriptor(
            key="taskType",
            label="Task Type",
            kind="select",
            default="Classification",
            required=True,
            options=(make_option("Classification"), make_option("Regression")),
        ),
        FieldDescriptor(
            key="modelName",
            label="Model",
            kind="select",
            default="Random Forest",
            required=True,
            options=(
                make_option("Linear Regression"),
                make_option("Logistic Regression"),
                make_option("Decision Tree"),
                make_option("Random Forest"),
                make_option("SVM", "Support Vector Machine"),
                make_option("KNN", "K-Nearest Neighbors"),
            ),
        ),
        FieldDescriptor(
            key="modelType",
            label="Model Type",
            kind="select",
            default="Ensemble",
            options=(
                make_option("Linear"),
                make_option("Tree", "Tree-based"),
                make_option("Ensemble"),
                make_option("Neural", "Neural Network"),
            ),
        ),
    )
    rules = (
        NodeRule(
            severity=Severity.WARNING,
            message="Logistic Regression is for classification, not regression tasks",
            predicate=lambda config, pipeline: (
                config.get("modelName") == "Logistic Regression" and config.get("taskType") == "Regression"
            ),
        ),
        NodeRule(
            severity=Severity.WARNING,
            message="Linear Regression is for regression, not classification tasks",
            predicate=lambda config, pipeline: (
                config.get("modelName") == "Linear Regression" and config.get("taskType") == "Classification"
            ),
        ),
    )

    def generate_code(self, config: Config) -> str:
        variants = _MODELS[choice_or(config.get("modelName"), _MODELS, "Random Forest")]
        import_line, constructor = variants[1] if config.get("taskType") == "Regression" else variants[0]
        return f"{import_line}\n\nmodel = {constructor}"


class TrainingNode(BaseNodeType):
    type = NodeType.TRAINING.value
    label = "Training"
    category = NodeCategory.MODEL
    description = "Fit the model on training data with optional cross-validation."
    fields = (
        FieldDescriptor(
            key="learningType",
            label="Learning Type",
            kind="select",
            default="Supervised",
            required=True,
            options=(
                make_option("Supervised", "Supervised Learning"),
                make_option("Unsupervised", "Unsupervised Learning"),
                make_option("SemiSupervised", "Semi-Supervised Learning"),
                make_option("Reinforcement", "Reinforcement Learning"),
            ),
            description="The learning paradigm for training.",
        ),
        FieldDescriptor(
            key="crossValidation",
            label="Enable Cross-Validation",
            kind="boolean",
            default=False,
            description="Evaluate model stability using k-fold cross-validation during training.",
        ),
        FieldDescriptor(
            key="cvFolds",
            label="CV Folds (k)",
            kind="slider",
            default=5,
            minimum=3,
            maximum=10,
            step=1,
            description="Number of folds for cross-validation.",
            depends_on=DependsOn("crossValidation", True),
        ),
        FieldDescriptor(
            key="classWeights",
            label="Class Weights",
            kind="select",
            default="None",
            options=(
                make_option("None", "None (default)"),
                make_option("balanced", "Balanced (auto-weight by frequency)"),
            ),
            description="Handle class imbalance by weighting minority classes higher.",
            depends_on=DependsOn("learningType", "Supervised"),
        ),
        FieldDescriptor(
            key="earlyStoppingPatience",
            label="Early Stopping Patience",
            kind="number",
            default=10,
            minimum=1,
            placeholder="10",
            description="Stop training if validation loss doesn't improve for N epochs (neural networks).",
            depends_on=DependsOn("learningType", "Supervised"),
        ),
        FieldDescriptor(
            key="verbose",
            label="Verbose Output",
            kind="boolean",
            default=False,
            description="Print detailed training progress to the console.",
        ),
    )
    rules = (
        NodeRule(
            severity=Severity.ERROR,
            message="Training node requires a Data Split node before it",
            predicate=lambda config, pipeline: not pipeline.has_type(NodeType.DATA_SPLIT),
            suggestion="Add a Data Split node upstream of training",
        ),
    )

    def generate_code(self, config: Config) -> str:
        lines: List[str] = ["# Train the model"]
        if config.get("crossValidation"):
            folds = number_or(config.get("cvFolds"), 5)
            lines += [
                "from sklearn.model_selection import cross_val_score",
                "import numpy as np",
                "",
                "# Cross-validation training",
                f"cv_scores = cross_val_score(model, X_train, y_train, cv={folds}, scoring='accuracy')",
                'print(f"CV Scores: {cv_scores}")',
                'print(f"Mean CV Score: {cv_scores.mean():.4f} (+/- {cv_scores.std() * 2:.4f})")',
                "",
                "# Final fit on full training data",
            ]

        if config.get("classWeights") == "balanced":
            lines.append("# Note: set class_weight='balanced' in your model constructor for imbalanced datasets")

        if config.get("learningType") == "Unsupervised":
            lines += ["model.fit(X_train)", "", 'print("Training complete")']
        else:
            lines += [
                "model.fit(X_train, y_train)",
                "",
                'print("Training complete")',
                'print(f"Training score: {model.score(X_train, y_train):.4f}")',
            ]

        if config.get("verbose"):
            lines.append('print(f"Model parameters: {model.get_params()}")')
        return "\n".join(lines)


_CLASSIFICATION_METRICS = (
    make_option("Accuracy"),
    make_option("Precision"),
    make_option("Recall"),
    make_option("F1", "F1 Score"),
    make_option("ROC-AUC"),
    make_option("LogLoss", "Log Loss"),
    make_option("MCC", "Matthews Correlation Coefficient"),
)

_REGRESSION_METRICS = (
    make_option("MAE", "Mean Absolute Error (MAE)"),
    make_option("MSE", "Mean Squared Error (MSE)"),
    make_option("RMSE", "Root MSE (RMSE)"),
    make_option("R2", "R² Score"),
    make_option("MAPE", "Mean Absolute Percentage Error (MAPE)"),
)

_CLUSTERING_METRICS = (
    make_option("Silhouette", "Silhouette Score"),
    make_option("DaviesBouldin", "Davies-Bouldin Index"),
    make_option("CalinskiHarabasz", "Calinski-Harabasz Index"),
)

_CLASSIFICATION_IMPORTS = (
    ("Accuracy", "accuracy_score"),
    ("Precision", "precision_score"),
    ("Recall", "recall_score"),
    ("F1", "f1_score"),
    ("ROC-AUC", "roc_auc_score"),
    ("LogLoss", "log_loss"),
    ("MCC", "matthews_corrcoef"),
)

_CLASSIFICATION_LINES = {
    "Accuracy": ['print(f"Accuracy: {accuracy_score(y_test, y_pred):.4f}")'],
    "Precision": ['print(f"Precision: {precision_score(y_test, y_pred, average=\'weighted\'):.4f}")'],
    "Recall": ['print(f"Recall: {recall_score(y_test, y_pred, average=\'weighted\'):.4f}")'],
    "F1": ['print(f"F1 Score: {f1_score(y_test, y_pred, average=\'weighted\'):.4f}")'],
    "ROC-AUC": [
        "y_prob = model.predict_proba(X_test)[:, 1]",
        'print(f"ROC-AUC: {roc_auc_score(y_test, y_prob):.4f}")',
    ],
    "LogLoss": [
        "y_prob = model.predict_proba(X_test)",
        'print(f"Log Loss: {log_loss(y_test, y_prob):.4f}")',
    ],
    "MCC": ['print(f"MCC: {matthews_corrcoef(y_test, y_pred):.4f}")'],
}

_REGRESSION_LINES = {
    "MAE": 'print(f"MAE: {mean_absolute_error(y_test, y_pred):.4f}")',
    "MSE": 'print(f"MSE: {mean_squared_error(y_test, y_pred):.4f}")',
    "RMSE": 'print(f"RMSE: {np.sqrt(mean_squared_error(y_test, y_pred)):.4f}")',
    "R2": 'print(f"R²: {r2_score(y_test, y_pred):.4f}")',
    "MAPE": 'print(f"MAPE: {np.mean(np.abs((y_test - y_pred) / y_test)) * 100:.2f}%")',
}

_CLUSTERING_LINES = {
    "Silhouette": 'print(f"Silhouette Score: {silhouette_score(X, labels):.4f}")',
    "DaviesBouldin": 'print(f"Davies-Bouldin Index: {davies_bouldin_score(X, labels):.4f}")',
    "CalinskiHarabasz": 'print(f"Calinski-Harabasz Index: {calinski_harabasz_score(X, labels):.4f}")',
}


class EvaluationNode(BaseNodeType):
    type = NodeType.EVALUATION.value
    label = "Evaluation"
    category = NodeCategory.MODEL
    description = "Measure model performance using metrics and visualizations."
    fields = (
        FieldDescriptor(
            key="evaluationType",
            label="Evaluation Type",
            kind="select",
            default="Classification",
            required=True,
            options=(make_option("Classification"), make_option("Regression"), make_option("Clustering")),
            description="Match this to your model's task type.",
        ),
        FieldDescriptor(
            key="metrics",
            label="Metrics",
            kind="multiselect",
            default=["Accuracy", "F1", "ROC-AUC"],
            options=_CLASSIFICATION_METRICS,
            description="Select the metrics to compute.",
            depends_on=DependsOn("evaluationType", "Classification"),
        ),
        FieldDescriptor(
            key="metrics",
            label="Metrics",
            kind="multiselect",
            default=["MAE", "RMSE", "R2"],
            options=_REGRESSION_METRICS,
            description="Select the metrics to compute.",
            depends_on=DependsOn("evaluationType", "Regression"),
        ),
        FieldDescriptor(
            key="metrics",
            label="Metrics",
            kind="multiselect",
            default=["Silhouette"],
            options=_CLUSTERING_METRICS,
            description="Select the metrics to compute.",
            depends_on=DependsOn("evaluationType", "Clustering"),
        ),
        FieldDescriptor(
            key="crossValidation",
            label="Cross-Validation Evaluation",
            kind="boolean",
            default=False,
            description="Evaluate using k-fold cross-validation instead of a single test set.",
        ),
        FieldDescriptor(
            key="cvFolds",
            label="CV Folds (k)",
            kind="slider",
            default=5,
            minimum=3,
            maximum=10,
            step=1,
            depends_on=DependsOn("crossValidation", True),
        ),
        FieldDescriptor(
            key="generateConfusionMatrix",
            label="Confusion Matrix",
            kind="boolean",
            default=True,
            description="Generate and plot a confusion matrix.",
            depends_on=DependsOn("evaluationType", "Classification"),
        ),
        FieldDescriptor(
            key="generateROCCurve",
            label="ROC Curve",
            kind="boolean",
            default=False,
            description="Plot the Receiver Operating Characteristic curve.",
            depends_on=DependsOn("evaluationType", "Classification"),
        ),
        FieldDescriptor(
            key="generateResidualPlot",
            label="Residual Plot",
            kind="boolean",
            default=False,
            description="Plot predicted vs actual residuals.",
            depends_on=DependsOn("evaluationType", "Regression"),
        ),
    )
    rules = (
        NodeRule(
            severity=Severity.ERROR,
            message="Evaluation node requires a Training node before it",
            predicate=lambda config, pipeline: not pipeline.has_type(NodeType.TRAINING),
            suggestion="Add a Training node upstream of evaluation",
        ),
    )

    def generate_code(self, config: Config) -> str:
        metrics = config.get("metrics")
        if not isinstance(metrics, (list, tuple)):
            metrics = ["Accuracy"]
        evaluation_type = config.get("evaluationType")
        if evaluation_type == "Regression":
            return self._regression(config, metrics)
        if evaluation_type == "Clustering":
            return self._clustering(metrics)
        return self._classification(config, metrics)

    @staticmethod
    def _regression(config: Config, metrics) -> str:
        lines = [
            "from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score",
            "import numpy as np",
            "",
            "# Make predictions",
            "y_pred = model.predict(X_test)",
            "",
            "# Regression metrics",
        ]
        lines += [line for key, line in _REGRESSION_LINES.items() if key in metrics]
        if config.get("generateResidualPlot"):
            lines += [
                "",
                "import matplotlib.pyplot as plt",
                "",
                "# Residual plot",
                "residuals = y_test - y_pred",
                "plt.figure(figsize=(10, 5))",
                "plt.scatter(y_pred, residuals, alpha=0.5)",
                "plt.axhline(y=0, color='r', linestyle='--')",
                'plt.xlabel("Predicted")',
                'plt.ylabel("Residuals")',
                'plt.title("Residual Plot")',
                "plt.show()",
            ]
        return "\n".join(lines)

    @staticmethod
    def _clustering(metrics) -> str:
        lines = [
            "from sklearn.metrics import silhouette_score, davies_bouldin_score, calinski_harabasz_score",
            "",
            "# Clustering evaluation",
            "labels = model.labels_ if hasattr(model, 'labels_') else model.predict(X)",
        ]
        lines += [line for key, line in _CLUSTERING_LINES.items() if key in metrics]
        return "\n".join(lines)

    @staticmethod
    def _classification(config: Config, metrics) -> str:
        names = [name for key, name in _CLASSIFICATION_IMPORTS if key in metrics]
        if config.get("generateConfusionMatrix"):
            names += ["confusion_matrix", "ConfusionMatrixDisplay"]
        if config.get("generateROCCurve"):
            names.append("RocCurveDisplay")

        lines: List[str] = []
        if names:
            lines += [f"from sklearn.metrics import {', '.join(names)}", ""]
        lines += ["# Make predictions", "y_pred = model.predict(X_test)", "", "# Metrics"]
        for key, _ in _CLASSIFICATION_IMPORTS:
            if key in metrics:
                lines += _CLASSIFICATION_LINES[key]

        if config.get("crossValidation"):
            folds = number_or(config.get("cvFolds"), 5)
            lines += [
                "",
                "# Cross-validation",
                "from sklearn.model_selection import cross_val_score",
                f"cv_scores = cross_val_score(model, X_train, y_train, cv={folds})",
                'print(f"\\nCV Scores: {cv_scores}")',
                'print(f"Mean CV: {cv_scores.mean():.4f} (+/- {cv_scores.std() * 2:.4f})")',
            ]

        if config.get("generateConfusionMatrix"):
            lines += [
                "",
                "import matplotlib.pyplot as plt",
                "",
                "# Confusion matrix",
                "cm = confusion_matrix(y_test, y_pred)",
                "disp = ConfusionMatrixDisplay(confusion_matrix=cm)",
                "disp.plot(cmap='Blues')",
                'plt.title("Confusion Matrix")',
                "plt.show()",
            ]

        if config.get("generateROCCurve"):
            lines += [
                "",
                "import matplotlib.pyplot as plt",
                "",
                "# ROC Curve",
                "RocCurveDisplay.from_estimator(model, X_test, y_test)",
                'plt.title("ROC Curve")',
                "plt.show()",
            ]
        return "\n".join(lines)
