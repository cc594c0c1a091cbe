[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hashstr"
version = "0.2.0"
description = "Strings with a precomputed hash, with interning caches."
requires-python = ">=3.10"
keywords = ["hash", "precomputed", "interning", "string", "cache"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hashstr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
