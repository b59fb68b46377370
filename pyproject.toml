[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "querygen"
version = "0.1.0"
description = "Building blocks for generating typed query code from model descriptions and SQL templates in doc comments"
requires-python = ">=3.10"
dependencies = []
keywords = ["code generation", "sql", "orm", "templates", "query builder"]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["querygen*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
