[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minisql"
version = "2022.7.0"
description = "Storage pieces of a small relational database: typed fields, columns, schemas, rows, buffer replacers, a reader-writer latch and log-based recovery"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "storage", "serialization", "buffer", "replacer", "recovery", "sql"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minisql"]

[tool.pytest.ini_options]
addopts = "-ra"
