[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "megatron"
version = "0.1.0"
description = "A teaching database engine that stores CSV relations as '#'-delimited files on a simulated, file-backed disk of plates, surfaces, tracks and sectors"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "disk", "simulation", "csv", "schema", "query"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
megatron = "megatron.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["megatron"]

[tool.pytest.ini_options]
addopts = "-ra"
