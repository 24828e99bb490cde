[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inkextrinsics"
version = "0.1.0"
description = "Balance denomination, call payloads, environment checks, contract info and contract storage decoding for ink! smart contracts"
requires-python = ">=3.10"
dependencies = []
keywords = ["ink", "substrate", "smart-contracts", "extrinsics", "balance", "storage"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["inkextrinsics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
