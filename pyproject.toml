[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kindling"
version = "0.1.0"
description = "Building blocks for running local Kubernetes clusters in Docker containers"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["kubernetes", "docker", "cluster", "yaml", "json-patch", "merge-patch", "spinner"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kindling"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
