[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "archlab"
version = "0.1.0"
description = "Computer architecture lab exercises: cache simulators, number representations, graph utilities and small data-structure drills"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "computer-architecture",
    "cache-simulator",
    "floating-point",
    "ieee-754",
    "graphs",
    "education",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
archlab-cache = "archlab.cache:main"
archlab-numrep = "archlab.numrep:main"
archlab-graphs = "archlab.graphs:main"
archlab-exercises = "archlab.exercises:main"

[tool.hatch.build.targets.wheel]
packages = ["archlab"]

[tool.hatch.build.targets.sdist]
include = ["archlab", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
