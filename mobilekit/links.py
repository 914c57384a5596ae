"""Creating hard and symbolic links, optionally clobbering what is in the way."""

from __future__ import annotations

import enum
import errno
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .paths import relativize_path

_ERROR_PRIVILEGE_NOT_HELD = 1314

_SYMLINK_NOT_ALLOWED_TEXT = """
Creation symbolic link is not allowed for this system.

For Windows 10 or newer:
You should use developer mode.

For Window 8.1 or older:
You need `SeCreateSymbolicLinkPrivilege` security policy."""


def _quote(value: object) -> str:
    return f'"{value}"'


def _file_name(path: Path) -> str | None:
    name = path.name
    return None if name in ("", "..") else name


class LinkType(enum.Enum):
    HARD = "hard"
    SYMBOLIC = "symbolic"

    def __str__(self) -> str:
        return self.value


class Clobber(enum.Enum):
    NEVER = "clobbering disabled"
    FILE_ONLY = "file clobbering enabled"
    FILE_OR_DIRECTORY = "file and directory clobbering enabled"

    def __str__(self) -> str:
        return self.value


class TargetStyle(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"

    def __str__(self) -> str:
        return self.value


class ErrorCause(enum.Enum):
    MISSING_FILE_NAME = "missing file name"
    LINK_FAILED = "link failed"
    IO_ERROR = "io error"
    SYMLINK_NOT_ALLOWED = "symlink not allowed"


class LinkError(Exception):
    """A link could not be created."""

    def __init__(
        self,
        link_type: LinkType,
        force: Clobber,
        source: os.PathLike | str,
        target: os.PathLike | str,
        target_style: TargetStyle,
        cause: ErrorCause,
        error: OSError | None = None,
    ) -> None:
        self.link_type = link_type
        self.force = force
        self.source = Path(source)
        self.target = Path(target)
        self.target_style = target_style
        self.cause = cause
        self.error = error
        super().__init__(
            f"Failed to create a {link_type} link from {_quote(self.source)} to "
            f"{target_style} {_quote(self.target)} ({force}): {self._cause_text()}"
        )

    def _cause_text(self) -> str:
        if self.cause is ErrorCause.MISSING_FILE_NAME:
            return "Neither the source nor target contained a file name."
        if self.cause is ErrorCause.LINK_FAILED:
            return f"Link creation failed: {self.error}"
        if self.cause is ErrorCause.IO_ERROR:
            return f"IO error: {self.error}"
        return _SYMLINK_NOT_ALLOWED_TEXT


def _remove_tree(path: Path) -> None:
    if path.is_symlink():
        path.unlink()
    else:
        shutil.rmtree(path)


@dataclass(frozen=True)
class LinkCall:
    """A single request to create a link from ``source`` at ``target``."""

    link_type: LinkType
    force: Clobber
    source: Path
    target: Path
    target_style: TargetStyle
    target_override: Path = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", Path(self.source))
        object.__setattr__(self, "target", Path(self.target))
        override = self.target
        if self.target_style is TargetStyle.DIRECTORY:
            # Inside a directory target, the link is named after the source.
            name = _file_name(self.source)
            if name is None:
                raise self._error(ErrorCause.MISSING_FILE_NAME)
            override = self.target / name
        object.__setattr__(self, "target_override", override)

    def _error(self, cause: ErrorCause, error: OSError | None = None) -> LinkError:
        return LinkError(
            self.link_type, self.force, self.source, self.target, self.target_style, cause, error
        )

    def run(self) -> None:
        """Create the link; symlinked directories at the destination count as files."""
        if self.force is Clobber.FILE_OR_DIRECTORY and self.target_override.is_dir():
            try:
                _remove_tree(self.target)
            except OSError as err:
                raise self._error(ErrorCause.IO_ERROR, err) from err
        destination = self.target_override
        if destination.is_dir() and not destination.is_symlink():
            destination = destination / self.source.name
        try:
            if os.path.lexists(destination):
                if self.force is Clobber.NEVER:
                    raise FileExistsError(errno.EEXIST, "File exists", str(destination))
                destination.unlink()
            if self.link_type is LinkType.SYMBOLIC:
                is_dir = (destination.parent / self.source).is_dir()
                os.symlink(self.source, destination, target_is_directory=is_dir)
            else:
                os.link(self.source, destination)
        except OSError as err:
            cause = (
                ErrorCause.SYMLINK_NOT_ALLOWED
                if getattr(err, "winerror", None) == _ERROR_PRIVILEGE_NOT_HELD
                else ErrorCause.LINK_FAILED
            )
            raise self._error(cause, err) from err


def force_symlink(
    source: os.PathLike | str, target: os.PathLike | str, target_style: TargetStyle
) -> None:
    """Create a symlink, replacing any file or directory in the way."""
    LinkCall(LinkType.SYMBOLIC, Clobber.FILE_OR_DIRECTORY, source, target, target_style).run()


def force_symlink_relative(
    abs_source: os.PathLike | str, abs_target: os.PathLike | str, target_style: TargetStyle
) -> None:
    """Like :func:`force_symlink`, but the link holds a path relative to ``abs_target``."""
    abs_source, abs_target = Path(abs_source), Path(abs_target)
    rel_source = relativize_path(abs_source, abs_target)
    if target_style is TargetStyle.DIRECTORY and _file_name(rel_source) is None:
        name = _file_name(abs_source)
        if name is None:
            raise LinkError(
                LinkType.SYMBOLIC,
                Clobber.FILE_OR_DIRECTORY,
                rel_source,
                abs_target,
                target_style,
                ErrorCause.MISSING_FILE_NAME,
            )
        force_symlink(rel_source, abs_target / name, TargetStyle.FILE)
    else:
        force_symlink(rel_source, abs_target, target_style)