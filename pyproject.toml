[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mpnet"
version = "0.1.0"
description = "Asyncio building blocks for multi-party networking: player sets, full-mesh connection, length-prefixed messaging and bandwidth shaping"
requires-python = ">=3.10"
keywords = ["multi-party computation", "networking", "asyncio", "token bucket", "bandwidth shaping"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Distributed Computing",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["mpnet"]

[tool.pytest.ini_options]
addopts = "-ra"
