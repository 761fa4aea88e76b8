[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "enginekit"
version = "0.1.0"
description = "Building blocks for a UCI chess engine: time management, transposition table, Zobrist hashing, UCI command parsing and evaluation tuning"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "uci", "engine", "zobrist", "transposition-table", "texel-tuning", "adam"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["enginekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
