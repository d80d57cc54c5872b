[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fruitgift"
version = "0.1.0"
description = "Domain model for a fruit gift-economy simulation game: bags, members, communities, an event log and luck adjustments."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "simulation", "gift-economy", "event-sourcing", "luck"]
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
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["fruitgift"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
