[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "icebergkit"
version = "0.1.0"
description = "Partition transforms, table scan planning and transactions for Iceberg-style tables"
requires-python = ">=3.10"
dependencies = []
keywords = ["iceberg", "table-format", "partitioning", "transform", "murmur3", "data-lake"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["icebergkit"]

[tool.pytest.ini_options]
addopts = "-ra"
