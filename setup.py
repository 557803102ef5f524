from pathlib import Path

from setuptools import find_packages, setup

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="pipeline-compiler",
    version="0.1.0",
    description="Compile visual ML pipeline graphs into validated Python scripts and notebooks.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    include_package_data=True,
    packages=find_packages(include=["pipeline_compiler", "pipeline_compiler.*", "backend", "backend.*"]),
    py_modules=["run_fastapi"],
    install_requires=[
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "fastapi>=0.100.0",
        "uvicorn[standard]>=0.23.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": ["pytest", "httpx"],
    },
    entry_points={
        "console_scripts": [
            "pipeline-compiler=run_fastapi:main",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
)
