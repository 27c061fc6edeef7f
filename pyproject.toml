[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spudformat"
version = "0.1.0"
description = "Build and decode SPUD, a compact tagged binary format for named fields"
requires-python = ">=3.10"
dependencies = []
keywords = ["spud", "binary", "serialization", "file-format", "encoder", "decoder"]
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
    "Topic :: File Formats",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spudformat"]

[tool.hatch.build.targets.sdist]
include = ["spudformat", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
files = ["spudformat"]
