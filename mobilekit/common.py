"""Small shared helpers: list formatting, domains, commit messages and more."""

from __future__ import annotations

import contextlib
import os
import re
import unicodedata
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

from .paths import NoHomeDir, install_dir


def _debug_str(text: str) -> str:
    """Quote ``text`` with escapes, the way debug output shows strings."""
    escapes = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}
    out = []
    for ch in text:
        if ch in escapes:
            out.append(escapes[ch])
        elif unicodedata.category(ch) == "Cc":
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


class CaptureGroupError(LookupError):
    """A named capture group was absent from a regex match."""

    def __init__(self, group: str, string: str) -> None:
        self.group = group
        self.string = string
        super().__init__(
            f"Capture group {_debug_str(group)} missing from string {_debug_str(string)}"
        )


class InstalledCommitMsgError(Exception):
    """The installed commit message could not be read."""


def list_display(items: Sequence[Any]) -> str:
    """Join items as English prose: ``a``, ``a and b``, ``a, b, and c``."""
    items = [str(item) for item in items]
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    if not items:
        return ""
    return "".join(f"{item}, " for item in items[:-1]) + f"and {items[-1]}"


def reverse_domain(domain: str) -> str:
    """Reverse the dot-separated labels of a domain."""
    return ".".join(reversed(domain.split(".")))


def prepend_to_path(path: Any, base_path: Any) -> str:
    """Build a ``PATH``-style value with ``path`` in front of ``base_path``."""
    return f"{path}:{base_path}"


def format_commit_msg(msg: str) -> str:
    return f"Contains commits up to {_debug_str(msg)}"


def installed_commit_msg() -> str | None:
    """Read the commit message recorded in the install directory, if any."""
    try:
        path = install_dir() / "commit"
    except NoHomeDir as err:
        raise InstalledCommitMsgError(str(err)) from err
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise InstalledCommitMsgError(
            f"Failed to read version info from {_debug_str(str(path))}: {err}"
        ) from err


def one_or_many(value: Any) -> list:
    """Normalize a single value or a list of values into a list."""
    if isinstance(value, list):
        return list(value)
    return [value]


@contextlib.contextmanager
def with_working_dir(working_dir: str | os.PathLike) -> Iterator[Path]:
    """Run the enclosed block with ``working_dir`` as the current directory."""
    previous = Path.cwd()
    os.chdir(working_dir)
    try:
        yield Path(working_dir)
    finally:
        os.chdir(previous)


def get_string_for_group(match: re.Match, group: str, string: str) -> str:
    """Return the text of a named group, raising if it did not take part."""
    try:
        value = match.group(group)
    except IndexError:
        value = None
    if value is None:
        raise CaptureGroupError(group, string)
    return value