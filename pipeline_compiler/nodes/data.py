"""Data-phase node types: ingest, preprocessing, EDA, feature engineering, split."""

import math
from typing import List

from ..constants import NodeCategory, NodeType, Severity
from ..fields import DependsOn, FieldDescriptor, make_option
from .base import BaseNodeType, Config, NodeRule, choice_or, literal, number_or, text_or
from .model import ModelSelectionNode

_LOADED = 'print(f"Loaded {len(df)} rows, {len(df.columns)} columns")'

_FILE_SOURCES = ("CSV", "Excel", "JSON", "Parquet", "API", "Scraping", "HuggingFace")


class IngestNode(BaseNodeType):
    type = NodeType.INGEST.value
    label = "Data Ingest"
    category = NodeCategory.DATA
    description = "Load data from various sources into your pipeline."
    max_instances = 1
    fields = (
        FieldDescriptor(
            key="sourceType",
            label="Source Type",
            kind="select",
            default="CSV",
            required=True,
            options=(
                make_option("CSV", "CSV File"),
                make_option("Excel", "Excel (XLSX)"),
                make_option("JSON", "JSON File"),
                make_option("Parquet", "Parquet File"),
                make_option("SQL", "SQL Database"),
                make_option("API", "REST API"),
                make_option("Scraping", "Web Scraping"),
                make_option("HuggingFace", "HuggingFace Dataset"),
            ),
            description="Where to load your data from.",
        ),
        FieldDescriptor(
            key="filePath",
            label="File Path / URL",
            kind="text",
            default="",
            placeholder="e.g. data/train.csv or https://...",
            description="Path to the file or URL of the data source.",
            depends_on=DependsOn("sourceType", _FILE_SOURCES),
        ),
        FieldDescriptor(
            key="delimiter",
            label="Delimiter",
            kind="text",
            default=",",
            placeholder=",",
            description="Column separator character.",
            depends_on=DependsOn("sourceType", "CSV"),
        ),
        FieldDescriptor(
            key="connectionString",
            label="Connection String",
            kind="text",
            default="sqlite:///database.db",
            description="SQLAlchemy database URL.",
            depends_on=DependsOn("sourceType", "SQL"),
        ),
        FieldDescriptor(
            key="query",
            label="SQL Query",
            kind="textarea",
            default="SELECT * FROM table_name",
            depends_on=DependsOn("sourceType", "SQL"),
        ),
        FieldDescriptor(
            key="dataType",
            label="Data Type",
            kind="select",
            default="Tabular",
            required=True,
            options=(
                make_option("Tabular"),
                make_option("Text", "Text / NLP"),
                make_option("Image"),
                make_option("TimeSeries", "Time Series"),
                make_option("Audio"),
            ),
            description="The type/modality of the data.",
        ),
        FieldDescriptor(
            key="targetColumn",
            label="Target Column",
            kind="text",
            default="",
            placeholder="e.g. label, price, survived",
            description="Name of the column to predict (leave blank for unsupervised).",
        ),
        FieldDescriptor(
            key="sampleSize",
            label="Sample Size (rows)",
            kind="number",
            default=0,
            minimum=0,
            placeholder="0 = load all rows",
            description="Limit rows loaded. 0 means load the full dataset.",
        ),
        FieldDescriptor(
            key="schemaKnown",
            label="Schema Known",
            kind="boolean",
            default=True,
            description="Whether the column types are known in advance.",
        ),
    )

    def generate_code(self, config: Config) -> str:
        source = config.get("sourceType") or "CSV"
        path = config.get("filePath")

        if source == "Excel":
            lines = [
                "import pandas as pd",
                "",
                "# Load data from Excel",
                f'df = pd.read_excel("{text_or(path, "data.xlsx")}")',
                _LOADED,
            ]
        elif source == "JSON":
            lines = [
                "import pandas as pd",
                "",
                "# Load data from JSON",
                f'df = pd.read_json("{text_or(path, "data.json")}")',
                _LOADED,
            ]
        elif source == "Parquet":
            lines = [
                "import pandas as pd",
                "",
                "# Load data from Parquet",
                f'df = pd.read_parquet("{text_or(path, "data.parquet")}")',
                _LOADED,
            ]
        elif source == "SQL":
            lines = [
                "import pandas as pd",
                "from sqlalchemy import create_engine",
                "",
                "# Load data from SQL database",
                f'engine = create_engine("{text_or(config.get("connectionString"), "sqlite:///database.db")}")',
                f'df = pd.read_sql_query("{text_or(config.get("query"), "SELECT * FROM table_name")}", engine)',
                _LOADED,
            ]
        elif source == "API":
            lines = [
                "import requests",
                "import pandas as pd",
                "",
                "# Load data from REST API",
                f'response = requests.get("{text_or(path, "https://api.example.com/data")}")',
                "data = response.json()",
                "df = pd.DataFrame(data)",
                _LOADED,
            ]
        elif source == "Scraping":
            lines = [
                "import requests",
                "from bs4 import BeautifulSoup",
                "import pandas as pd",
                "",
                "# Scrape data from web",
                f'response = requests.get("{text_or(path, "https://example.com")}")',
                "soup = BeautifulSoup(response.text, 'html.parser')",
                "# Parse the page and build a DataFrame",
                "df = pd.DataFrame()  # Fill in your parsing logic",
                'print(f"Scraped {len(df)} rows")',
            ]
        elif source == "HuggingFace":
            lines = [
                "from datasets import load_dataset",
                "import pandas as pd",
                "",
                "# Load dataset from HuggingFace Hub",
                f'dataset = load_dataset("{text_or(path, "dataset_name")}")',
                "df = dataset['train'].to_pandas()",
                _LOADED,
            ]
        else:
            lines = [
                "import pandas as pd",
                "",
                "# Load data from CSV",
                f'df = pd.read_csv("{text_or(path, "data.csv")}", sep="{text_or(config.get("delimiter"), ",")}")',
                _LOADED,
            ]

        sample_size = number_or(config.get("sampleSize"), 0)
        if sample_size > 0:
            lines += ["", "# Sample the dataset", f"df = df.sample(n={int(sample_size)}, random_state=42)"]

        target = text_or(config.get("targetColumn"), "")
        if target:
            lines += [
                "",
                "# Separate features and target",
                f"X = df.drop(columns=[{literal(target)}])",
                f"y = df[{literal(target)}]",
            ]
        return "\n".join(lines)


def _has_tree_model(config: Config, pipeline) -> bool:
    if config.get("scaling", "None") == "None":
        return False
    model_selection = ModelSelectionNode()
    return any(
        model_selection.effective_configuration(node.configuration).get("modelType") in ("Tree", "Ensemble")
        for node in pipeline.nodes_of_type(NodeType.MODEL_SELECTION)
    )


class PreprocessNode(BaseNodeType):
    type = NodeType.PREPROCESS.value
    label = "Preprocessing"
    category = NodeCategory.DATA
    description = "Clean and normalize data"
    fields = (
        FieldDescriptor(
            key="dropColumns",
            label="Columns to Drop",
            kind="tags",
            default=[],
            description="Columns removed before any other step.",
        ),
        FieldDescriptor(
            key="missingValues",
            label="Missing Values",
            kind="select",
            default="Mean",
            options=(
                make_option("Drop", "Drop Rows"),
                make_option("Mean", "Fill with Mean"),
                make_option("Median", "Fill with Median"),
                make_option("Mode", "Fill with Mode"),
            ),
        ),
        FieldDescriptor(
            key="scaling",
            label="Scaling Method",
            kind="select",
            default="Standard",
            options=(
                make_option("None"),
                make_option("Standard", "Standard Scaler"),
                make_option("MinMax", "Min-Max Scaler"),
            ),
        ),
        FieldDescriptor(
            key="encoding",
            label="Encoding Method",
            kind="select",
            default="OneHot",
            options=(
                make_option("None"),
                make_option("Label", "Label Encoding"),
                make_option("OneHot", "One-Hot Encoding"),
            ),
        ),
    )
    rules = (
        NodeRule(
            severity=Severity.WARNING,
            message="Tree-based models typically don't require feature scaling",
            predicate=_has_tree_model,
        ),
    )

    def generate_code(self, config: Config) -> str:
        lines: List[str] = []
        drop_columns = config.get("dropColumns") or []
        if drop_columns:
            lines += ["# Drop unused columns", f"df = df.drop(columns={literal(drop_columns)})", ""]

        missing = choice_or(config.get("missingValues"), ("Mean", "Median", "Mode", "Drop"), "Mean")
        lines.append("# Handle missing values")
        if missing == "Drop":
            lines.append("df = df.dropna()")
        elif missing == "Mode":
            lines.append("df = df.fillna(df.mode().iloc[0])")
        else:
            lines.append(f"df = df.fillna(df.{missing.lower()}(numeric_only=True))")

        scaling = config.get("scaling") or "None"
        if scaling != "None":
            scaler = "StandardScaler" if scaling == "Standard" else "MinMaxScaler"
            lines += [
                "",
                f"from sklearn.preprocessing import {scaler}",
                "import numpy as np",
                "",
                "# Scale numerical features",
                f"scaler = {scaler}()",
                "numerical_cols = df.select_dtypes(include=[np.number]).columns",
                "df[numerical_cols] = scaler.fit_transform(df[numerical_cols])",
            ]

        encoding = config.get("encoding") or "None"
        if encoding == "OneHot":
            lines += [
                "",
                "import pandas as pd",
                "",
                "# Encode categorical features",
                "df = pd.get_dummies(df, drop_first=True)",
            ]
        elif encoding == "Label":
            lines += [
                "",
                "from sklearn.preprocessing import LabelEncoder",
                "",
                "# Encode categorical features",
                "le = LabelEncoder()",
                "categorical_cols = df.select_dtypes(include=['object']).columns",
                "for col in categorical_cols:",
                "    df[col] = le.fit_transform(df[col])",
            ]
        return "\n".join(lines)


_EDA_TEMPLATES = {
    "Univariate": """import matplotlib.pyplot as plt
import seaborn as sns

# Univariate analysis
for col in df.columns:
    plt.figure(figsize=(10, 4))
    if df[col].dtype in ['int64', 'float64']:
        sns.histplot(df[col], kde=True)
    else:
        df[col].value_counts().plot(kind='bar')
    plt.title(f'Distribution of {col}')
    plt.show()""",
    "Bivariate": """import matplotlib.pyplot as plt
import seaborn as sns

# Bivariate analysis
sns.pairplot(df)
plt.show()

# Correlation matrix
plt.figure(figsize=(12, 8))
sns.heatmap(df.corr(numeric_only=True), annot=True, cmap='coolwarm')
plt.title('Correlation Matrix')
plt.show()""",
    "Multivariate": """import matplotlib.pyplot as plt
from sklearn.decomposition import PCA

# PCA for multivariate analysis
pca = PCA(n_components=2)
pca_result = pca.fit_transform(df.select_dtypes(include=['float64', 'int64']))

plt.figure(figsize=(10, 6))
plt.scatter(pca_result[:, 0], pca_result[:, 1])
plt.xlabel('First Principal Component')
plt.ylabel('Second Principal Component')
plt.title('PCA Analysis')
plt.show()""",
    "Profiling": """from ydata_profiling import ProfileReport

# Generate comprehensive EDA report
profile = ProfileReport(df, title='Data Profiling Report')
profile.to_file("eda_report.html")
print("EDA report saved to eda_report.html")""",
}


class ExplorationNode(BaseNodeType):
    type = NodeType.EXPLORATION.value
    label = "EDA"
    category = NodeCategory.DATA
    description = "Exploratory data analysis"
    fields = (
        FieldDescriptor(
            key="edaType",
            label="Analysis Type",
            kind="select",
            default="Profiling",
            options=(
                make_option("Univariate", "Univariate Analysis"),
                make_option("Bivariate", "Bivariate Analysis"),
                make_option("Multivariate", "Multivariate Analysis"),
                make_option("Profiling", "Data Profiling Report"),
            ),
        ),
    )

    def generate_code(self, config: Config) -> str:
        return _EDA_TEMPLATES[choice_or(config.get("edaType"), _EDA_TEMPLATES, "Profiling")]


class FeatureEngineeringNode(BaseNodeType):
    type = NodeType.FEATURE_ENGINEERING.value
    label = "Feature Engineering"
    category = NodeCategory.DATA
    description = "Transform and create features"
    fields = (
        FieldDescriptor(
            key="transformationType",
            label="Transformation Type",
            kind="select",
            default="Polynomial",
            options=(
                make_option("None"),
                make_option("Polynomial", "Polynomial Features"),
                make_option("Selection", "Feature Selection"),
                make_option("Domain", "Domain-Specific"),
                make_option("PCA", "Principal Component Analysis"),
                make_option("LogTransform", "Log Transform"),
                make_option("Binning", "Binning"),
            ),
        ),
        FieldDescriptor(
            key="polynomialDegree",
            label="Polynomial Degree",
            kind="number",
            default=2,
            minimum=1,
            depends_on=DependsOn("transformationType", "Polynomial"),
        ),
        FieldDescriptor(
            key="selectK",
            label="Features to Keep (k)",
            kind="number",
            default=10,
            minimum=1,
            depends_on=DependsOn("transformationType", "Selection"),
        ),
        FieldDescriptor(
            key="nComponents",
            label="Components",
            kind="number",
            default=2,
            minimum=1,
            depends_on=DependsOn("transformationType", "PCA"),
        ),
        FieldDescriptor(
            key="nBins",
            label="Number of Bins",
            kind="slider",
            default=5,
            minimum=2,
            maximum=20,
            step=1,
            depends_on=DependsOn("transformationType", "Binning"),
        ),
    )
    rules = (
        NodeRule(
            severity=Severity.WARNING,
            message="High polynomial degrees may lead to overfitting",
            predicate=lambda config, pipeline: (
                config.get("transformationType") == "Polynomial"
                and number_or(config.get("polynomialDegree"), 0) > 3
            ),
        ),
    )

    def generate_code(self, config: Config) -> str:
        kind = config.get("transformationType")
        if kind == "Polynomial":
            degree = number_or(config.get("polynomialDegree"), 2) or 2
            return "\n".join([
                "from sklearn.preprocessing import PolynomialFeatures",
                "",
                "# Create polynomial features",
                f"poly = PolynomialFeatures(degree={degree})",
                "X_poly = poly.fit_transform(X)",
                'print(f"Created {X_poly.shape[1]} polynomial features")',
            ])
        if kind == "Selection":
            k = number_or(config.get("selectK"), 10)
            return "\n".join([
                "from sklearn.feature_selection import SelectKBest, f_classif",
                "",
                "# Select best features",
                f"selector = SelectKBest(f_classif, k={k})",
                "X_selected = selector.fit_transform(X, y)",
                'print(f"Selected {X_selected.shape[1]} features")',
            ])
        if kind == "Domain":
            return "\n".join([
                "# Domain-specific feature engineering",
                "# Example: Create interaction features",
                "df['feature_interaction'] = df['feature1'] * df['feature2']",
                "df['feature_ratio'] = df['feature1'] / (df['feature2'] + 1)",
                'print("Created domain-specific features")',
            ])
        if kind == "PCA":
            components = number_or(config.get("nComponents"), 2)
            return "\n".join([
                "from sklearn.decomposition import PCA",
                "",
                "# Reduce dimensionality with PCA",
                f"pca = PCA(n_components={components})",
                "X_pca = pca.fit_transform(X)",
                'print(f"Explained variance: {pca.explained_variance_ratio_.sum():.2%}")',
            ])
        if kind == "LogTransform":
            return "\n".join([
                "import numpy as np",
                "",
                "# Log-transform skewed numerical features",
                "numerical_cols = df.select_dtypes(include=[np.number]).columns",
                "df[numerical_cols] = np.log1p(df[numerical_cols].clip(lower=0))",
                'print("Applied log transform to numerical features")',
            ])
        if kind == "Binning":
            bins = number_or(config.get("nBins"), 5)
            return "\n".join([
                "from sklearn.preprocessing import KBinsDiscretizer",
                "",
                "# Bin continuous features",
                f"binner = KBinsDiscretizer(n_bins={bins}, encode='ordinal', strategy='quantile')",
                "X_binned = binner.fit_transform(X)",
                f'print(f"Binned {{X_binned.shape[1]}} features into {bins} bins")',
            ])
        return "# No feature engineering applied"


def _split_sizes_off(config: Config, pipeline) -> bool:
    total = (
        number_or(config.get("trainSize"), 0)
        + number_or(config.get("testSize"), 0)
        + number_or(config.get("validationSize"), 0)
    )
    return not math.isclose(total, 1.0, abs_tol=1e-9)


class DataSplitNode(BaseNodeType):
    type = NodeType.DATA_SPLIT.value
    label = "Data Split"
    category = NodeCategory.DATA
    description = "Split data into train/test/validation sets"
    max_instances = 1
    fields = (
        FieldDescriptor(key="trainSize", label="Train Size", kind="number", default=0.7,
                        required=True, minimum=0, maximum=1, step=0.05),
        FieldDescriptor(key="testSize", label="Test Size", kind="number", default=0.3,
                        required=True, minimum=0, maximum=1, step=0.05),
        FieldDescriptor(key="validationSize", label="Validation Size", kind="number", default=0,
                        minimum=0, maximum=1, step=0.05,
                        description="Fraction held out for validation (0 disables it)."),
        FieldDescriptor(key="randomState", label="Random State", kind="number", default=42),
        FieldDescriptor(key="stratify", label="Stratify", kind="boolean", default=False),
    )
    rules = (
        NodeRule(
            severity=Severity.WARNING,
            message="Train and test sizes should sum to 1.0",
            predicate=_split_sizes_off,
        ),
    )

    def generate_code(self, config: Config) -> str:
        train_size = config.get("trainSize")
        random_state = config.get("randomState")
        stratify = ",\n    stratify=y" if config.get("stratify") else ""
        lines = [
            "from sklearn.model_selection import train_test_split",
            "",
            "# Split data into train and test sets",
            "X_train, X_test, y_train, y_test = train_test_split(",
            "    X, y,",
            f"    train_size={train_size},",
            f"    test_size={config.get('testSize')},",
            f"    random_state={random_state}{stratify}",
            ")",
            "",
            'print(f"Train set: {len(X_train)} samples")',
            'print(f"Test set: {len(X_test)} samples")',
        ]

        validation_size = number_or(config.get("validationSize"), 0)
        train_fraction = number_or(train_size, 0)
        if validation_size > 0 and train_fraction > 0:
            relative = round(validation_size / train_fraction, 4)
            lines += [
                "",
                "# Carve a validation set out of the training data",
                "X_train, X_val, y_train, y_val = train_test_split(",
                "    X_train, y_train,",
                f"    test_size={relative},",
                f"    random_state={random_state}",
                ")",
                'print(f"Validation set: {len(X_val)} samples")',
            ]
        return "\n".join(lines)
