"""Building blocks for mobile project tooling: paths, versions, template packs,
submodule checks, links, cargo arguments, prompts and CLI reports."""

__version__ = "0.1.0"

__all__ = [
    "cargo",
    "cli",
    "common",
    "git",
    "helpers",
    "links",
    "packs",
    "paths",
    "prompt",
    "versions",
]