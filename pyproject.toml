[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "smarttodo"
version = "0.1.0"
description = "A command-line todo list manager with due dates, priorities, smart filtering and insights"
requires-python = ">=3.10"
dependencies = []
keywords = ["todo", "tasks", "cli", "productivity", "scheduling"]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
todo = "smarttodo.cli:main"

[tool.setuptools.packages.find]
include = ["smarttodo*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
