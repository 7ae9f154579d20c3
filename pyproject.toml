[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ngineer"
version = "0.1.0"
description = "Steady-state nodal analysis solver for DC circuits and heat transfer, plus a preprocessor for plain-text equation systems"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "nodal analysis",
    "circuits",
    "heat transfer",
    "newton-raphson",
    "equation solver",
    "engineering",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Scientific/Engineering :: Physics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ngineer-nodal = "ngineer.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ngineer"]

[tool.hatch.build.targets.sdist]
include = ["ngineer", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
