from typing import List

from ..constants import NodeCategory, NodeType
from ..fields import DependsOn, FieldDescriptor, make_option
from .base import BaseNodeType, Config, choice_or

_SAVE_MODEL = ["# Save the model", "import joblib", "joblib.dump(model, 'model.pkl')", ""]

_REST_TEMPLATES = {
    "FastAPI": [
        "# FastAPI deployment example",
        "from fastapi import FastAPI",
        "",
        "app = FastAPI()",
        "",
        '@app.post("/predict")',
        "def predict(features: list):",
        "    model = joblib.load('model.pkl')",
        "    prediction = model.predict([features])",
        '    return {"prediction": prediction.tolist()}',
        "",
        "# Run with: uvicorn main:app --reload",
    ],
    "Flask": [
        "# Flask deployment example",
        "from flask import Flask, jsonify, request",
        "",
        "app = Flask(__name__)",
        "",
        '@app.route("/predict", methods=["POST"])',
        "def predict():",
        "    model = joblib.load('model.pkl')",
        '    features = request.get_json()["features"]',
        "    prediction = model.predict([features])",
        '    return jsonify({"prediction": prediction.tolist()})',
        "",
        "# Run with: flask --app main run",
    ],
    "Django": [
        "# Django view example (add to views.py and route it in urls.py)",
        "import json",
        "from django.http import JsonResponse",
        "from django.views.decorators.csrf import csrf_exempt",
        "",
        "@csrf_exempt",
        "def predict(request):",
        "    model = joblib.load('model.pkl')",
        '    features = json.loads(request.body)["features"]',
        "    prediction = model.predict([features])",
        '    return JsonResponse({"prediction": prediction.tolist()})',
    ],
}


class DeploymentNode(BaseNodeType):
    type = NodeType.DEPLOYMENT.value
    label = "Deployment"
    category = NodeCategory.DEPLOYMENT
    description = "Deploy model to production"
    fields = (
        FieldDescriptor(
            key="deploymentType",
            label="Deployment Type",
            kind="select",
            default="REST API",
            required=True,
            options=(
                make_option("REST API"),
                make_option("Batch", "Batch Processing"),
                make_option("Streaming"),
            ),
        ),
        FieldDescriptor(
            key="framework",
            label="Framework",
            kind="select",
            default="FastAPI",
            options=(make_option("FastAPI"), make_option("Flask"), make_option("Django")),
            depends_on=DependsOn("deploymentType", "REST API"),
        ),
        FieldDescriptor(key="monitoring", label="Enable Monitoring", kind="boolean", default=True),
    )

    def generate_code(self, config: Config) -> str:
        deployment_type = config.get("deploymentType")
        lines: List[str] = list(_SAVE_MODEL)

        if deployment_type == "Batch":
            lines += [
                "import pandas as pd",
                "",
                "# Batch prediction",
                "def batch_predict(input_file, output_file):",
                "    model = joblib.load('model.pkl')",
                "    data = pd.read_csv(input_file)",
                "    predictions = model.predict(data)",
                "",
                "    results = pd.DataFrame({",
                "        'prediction': predictions",
                "    })",
                "    results.to_csv(output_file, index=False)",
                '    print(f"Predictions saved to {output_file}")',
                "",
                "batch_predict('input.csv', 'predictions.csv')",
            ]
        elif deployment_type == "Streaming":
            lines += [
                "# Streaming prediction",
                "def stream_predict(records):",
                "    model = joblib.load('model.pkl')",
                "    for record in records:",
                "        yield model.predict([record])[0]",
            ]
        else:
            lines += _REST_TEMPLATES[choice_or(config.get("framework"), _REST_TEMPLATES, "FastAPI")]

        if config.get("monitoring"):
            lines += [
                "",
                "# Prediction monitoring",
                "import logging",
                "",
                "logging.basicConfig(level=logging.INFO)",
                'monitor = logging.getLogger("model_monitoring")',
                'monitor.info("Model deployed with monitoring enabled")',
            ]
        return "\n".join(lines)
