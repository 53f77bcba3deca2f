[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "searchcore"
version = "0.1.0"
description = "Building blocks of a typo-tolerant search engine: query trees, synonym word mapping, token indexing and ranking maps."
requires-python = ">=3.10"
dependencies = [
    "unidecode",
]
keywords = ["search", "indexing", "query", "synonyms", "full-text"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["searchcore"]

[tool.pytest.ini_options]
addopts = "-ra"
