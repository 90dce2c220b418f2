import os
from setuptools import setup, find_packages

# locate files relative to this setup.py
HERE = os.path.abspath(os.path.dirname(__file__))


def parse_requirements(rel_path):
    path = os.path.join(HERE, rel_path)
    with open(path, "r") as f:
        lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


setup(
    name="dstraverse",
    version="0.1.0",
    description="Design system usage extractor for Tree-sitter syntax trees",
    long_description=open(os.path.join(HERE, "README.md")).read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["dstraverse", "dstraverse.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=parse_requirements("dstraverse/requirements.txt"),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "dstraverse=dstraverse.main:main",
            "dstraverse-batch=dstraverse.main:batch_main",
            "dstraverse-mcp=dstraverse.mcp.server:main",
        ],
    },
    package_data={
        "dstraverse": ["requirements.txt", "config/*.toml"],
        "dstraverse.mcp": ["tool_descriptions.toml"],
    },
    include_package_data=True,
)
