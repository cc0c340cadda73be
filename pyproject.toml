[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "todour"
version = "2.24.0"
description = "A todo.txt manager with thresholds, due dates, recurrence and undo"
requires-python = ">=3.10"
dependencies = []
keywords = ["todo.txt", "todo", "tasks", "gtd", "productivity"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
todour = "todour.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["todour"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
