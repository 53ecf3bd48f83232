[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "sqlrepl"
version = "0.1.0"
description = "Building blocks for a multi-database SQL command-line client: statement classification, SQLite and SQL Server metadata readers, timestamp handling and driver table generation"
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["sql", "database", "cli", "metadata", "sqlite", "sqlserver"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sqlrepl-gen = "sqlrepl.gen:main"

[tool.setuptools.packages.find]
include = ["sqlrepl*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
