[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uavmatch"
version = "0.1.0"
description = "Task allocation for UAV swarms by weighted bipartite matching, with greedy, exhaustive and clustering baselines"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "uav",
    "task allocation",
    "bipartite matching",
    "kuhn-munkres",
    "hungarian algorithm",
    "k-means",
    "scheduling",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
uavmatch = "uavmatch.experiment:main"
uavmatch-km = "uavmatch.kuhn_munkres:main"

[tool.hatch.build.targets.wheel]
packages = ["uavmatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
