[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rediskube"
version = "0.20.2"
description = "Reconciliation building blocks for running Redis standalone, replication, sentinel and cluster setups on Kubernetes"
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "kubernetes", "operator", "reconcile", "cluster", "sentinel"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rediskube"]

[tool.pytest.ini_options]
addopts = "-ra"
