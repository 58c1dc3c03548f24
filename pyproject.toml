[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "devbits"
version = "0.1.0"
description = "Helpers for developer tooling: source messages, linter output, Go package indexes, compiler core JSON models and small 3D spatial types."
requires-python = ">=3.10"
dependencies = []
keywords = ["linters", "tooling", "purescript", "go", "hlint", "frustum", "mesh", "sql", "mongodb", "bower"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["devbits"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
