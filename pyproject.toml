[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imessagedb"
version = "0.1.0"
description = "Helpers for reading Messages SQLite databases, NSKeyedArchiver property lists and typedstream bodies"
requires-python = ">=3.10"
dependencies = []
keywords = ["imessage", "sqlite", "plist", "typedstream", "nskeyedarchiver"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["imessagedb"]

[tool.pytest.ini_options]
addopts = "-ra"
