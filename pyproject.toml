[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tezvault"
version = "0.1.0"
description = "Tezos key vaults: in-memory keys and Ledger devices reached over the APDU TCP transport"
requires-python = ">=3.10"
keywords = ["tezos", "ledger", "apdu", "bip32", "signing", "vault", "baking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "cryptography",
    "click",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tezvault-ledger = "tezvault.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tezvault"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
