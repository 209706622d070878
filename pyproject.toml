[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mailproof"
version = "0.1.0"
description = "Building blocks for e-mail header zero-knowledge proofs over BN254: Fiat-Shamir transcript, evaluation domains, powers-of-tau parsing, circuit inputs and contract input encoding"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["zero-knowledge", "plonk", "kzg", "bn254", "email", "sha256", "transcript", "ptau"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["mailproof"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
