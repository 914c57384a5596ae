[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mobilekit"
version = "0.1.0"
description = "Building blocks for mobile project tooling: paths, versions, template packs, submodule checks, links, cargo arguments and CLI reports"
requires-python = ">=3.11"
keywords = ["mobile", "templates", "build-tools", "git", "cli", "cargo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = ["termcolor>=2.1"]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mobilekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
