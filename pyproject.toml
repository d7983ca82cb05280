[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hzoperator"
version = "0.1.0"
description = "Resource model for Hazelcast platform custom resources and an AsciiDoc API reference generator for their type definitions"
requires-python = ">=3.10"
keywords = ["hazelcast", "kubernetes", "operator", "crd", "asciidoc", "documentation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
    "Topic :: Software Development :: Documentation",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hz-apidocgen = "hzoperator.apidocgen:main"

[tool.hatch.build.targets.wheel]
packages = ["hzoperator"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
