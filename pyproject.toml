[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "elixir-engine"
version = "0.1.0"
description = "A small game engine core: events, input, timing, task execution and a pygame window layer"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game engine", "events", "input", "pygame", "task scheduler"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dissolve = "elixir_engine.application:main"

[tool.hatch.build.targets.wheel]
packages = ["elixir_engine"]

[tool.pytest.ini_options]
addopts = "-ra"
