[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nerdlog"
version = "0.1.0"
description = "Building blocks of a terminal log viewer: browser-like and command-line histories, command text helpers and histogram layout"
requires-python = ">=3.10"
dependencies = []
keywords = ["logs", "log viewer", "histogram", "history", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["nerdlog"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
