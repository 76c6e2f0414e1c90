[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zlogger"
version = "1.2.12"
description = "Building blocks for category-based logging: line buffers, levels, events, pattern specs and mapped diagnostic context"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "log", "pattern", "level", "mdc", "hexdump"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zlogger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
