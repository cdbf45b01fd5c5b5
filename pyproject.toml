[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rehabsched"
version = "0.1.0"
description = "Discrete-time simulation of a rehabilitation clinic scheduling patients onto therapy devices and gym rooms"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "scheduling",
    "simulation",
    "rehabilitation",
    "clinic",
    "queues",
    "discrete-time",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Healthcare Industry",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rehabsched = "rehabsched.scheduler:main"

[tool.hatch.build.targets.wheel]
packages = ["rehabsched"]

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
warn_unused_ignores = true
warn_redundant_casts = true
