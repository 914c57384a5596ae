"""Reading a repository's git metadata and checking submodule registration."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

_NAME_FROM_REMOTE = re.compile(r"(?P<name>\w+)\.git")


def _debug(value: object) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def _read_optional(path: Path) -> str | None:
    if path.exists():
        return path.read_text(encoding="utf-8")
    return None


@dataclass(frozen=True)
class Git:
    """A working tree rooted at ``root``."""

    root: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))

    def config(self) -> str | None:
        """Contents of ``.git/config``, or None if there is none."""
        return _read_optional(self.root / ".git" / "config")

    def modules(self) -> str | None:
        """Contents of ``.gitmodules``, or None if there is none."""
        return _read_optional(self.root / ".gitmodules")


class SubmoduleError(Exception):
    """A submodule's state could not be determined."""

    def __init__(self, submodule: Submodule, kind: str, cause: Exception | None = None) -> None:
        self.submodule = submodule
        self.kind = kind
        self.cause = cause
        if kind == "name_missing":
            message = (
                f"Failed to infer name for submodule at remote {_debug(submodule.remote)}; "
                "please specify a name explicitly."
            )
        else:
            checked = ".gitmodules" if kind == "index_check_failed" else ".git/config"
            message = (
                f"Failed to check {_debug(checked)} for submodule "
                f"{_debug(submodule.resolved_name())}: {cause}"
            )
        super().__init__(message)


@dataclass(frozen=True)
class Submodule:
    remote: str
    path: Path
    name: str | None = None
    lfs: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Submodule:
        """Build from a table with ``remote``, ``path``, optional ``name`` and ``lfs``."""
        for key in ("remote", "path"):
            if key not in data:
                raise ValueError(f"missing field `{key}`")
        remote, path = data["remote"], data["path"]
        name, lfs = data.get("name"), data.get("lfs", False)
        if not isinstance(remote, str):
            raise ValueError("invalid type for `remote`: expected a string")
        if not isinstance(path, (str, os.PathLike)):
            raise ValueError("invalid type for `path`: expected a path")
        if name is not None and not isinstance(name, str):
            raise ValueError("invalid type for `name`: expected a string")
        if not isinstance(lfs, bool):
            raise ValueError("invalid type for `lfs`: expected a boolean")
        return cls(remote, Path(path), name, lfs)

    def resolved_name(self) -> str | None:
        """The explicit name, or one inferred from the ``<name>.git`` remote."""
        if self.name is not None:
            return self.name
        match = _NAME_FROM_REMOTE.search(self.remote)
        name = match["name"] if match else None
        log.info("detected submodule name: %r", name)
        return name

    def _require_name(self) -> str:
        name = self.resolved_name()
        if name is None:
            raise SubmoduleError(self, "name_missing")
        return name

    def _section(self) -> str:
        return f"[submodule {_debug(self._require_name())}]"

    def in_index(self, git: Git) -> bool:
        """Whether ``.gitmodules`` lists this submodule."""
        section = self._section()
        try:
            modules = git.modules()
        except (OSError, UnicodeDecodeError) as err:
            raise SubmoduleError(self, "index_check_failed", err) from err
        return modules is not None and section in modules

    def initialized(self, git: Git) -> bool:
        """Whether ``.git/config`` holds an entry for this submodule."""
        section = self._section()
        try:
            config = git.config()
        except (OSError, UnicodeDecodeError) as err:
            raise SubmoduleError(self, "init_check_failed", err) from err
        return config is not None and section in config