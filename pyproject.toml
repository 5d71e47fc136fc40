[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dbpack"
version = "0.1.0"
description = "MySQL wire-protocol value codecs, date/time conversion, reserved-word quoting and SQL text helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["mysql", "protocol", "database", "codec", "datetime", "sql", "xid"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dbpack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
