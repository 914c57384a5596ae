"""Path helpers: home expansion, install directories and path arithmetic."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path, PurePath, PureWindowsPath

log = logging.getLogger(__name__)

INSTALL_DIR_NAME = ".mobilekit"
TEMP_DIR_NAME = "mobilekit"
_VERBATIM_PREFIX = "\\\\?\\"


def _quote(value: object) -> str:
    return f'"{value}"'


class NoHomeDir(Exception):
    """The user's home directory could not be determined."""

    def __init__(self) -> None:
        super().__init__("Failed to get user's home directory!")


class ContractHomeError(Exception):
    """A path could not have the home directory contracted to ``~``."""


class PathNotPrefixed(ValueError):
    """A path did not start with the expected prefix."""

    def __init__(self, path: PurePath, prefix: PurePath) -> None:
        self.path = path
        self.prefix = prefix
        super().__init__(f"Path {_quote(path)} didn't have prefix {_quote(prefix)}.")


class NormalizationError(Exception):
    """A path could not be normalized."""

    def __init__(self, message: str, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)


def home_dir() -> Path:
    """Return the user's home directory."""
    home = os.path.expanduser("~")
    if not home or home == "~":
        raise NoHomeDir()
    return Path(home)


def expand_home(path: str | os.PathLike) -> Path:
    """Replace a leading ``~`` component with the home directory."""
    home = home_dir()
    path = Path(path)
    if path.parts and path.parts[0] == "~":
        return home.joinpath(*path.parts[1:])
    return path


def _as_text(path: str | os.PathLike | bytes) -> str | None:
    raw = os.fspath(path)
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return raw


def contract_home(path: str | os.PathLike) -> str:
    """Replace occurrences of the home directory in ``path`` with ``~``."""
    text = _as_text(path)
    if text is None:
        raise ContractHomeError("Supplied path wasn't valid UTF-8.")
    if os.name == "nt":
        return text
    try:
        home = home_dir()
    except NoHomeDir as err:
        raise ContractHomeError(str(err)) from err
    home_text = _as_text(home)
    if home_text is None:
        raise ContractHomeError("User's home directory path wasn't valid UTF-8.")
    return text.replace(home_text, "~")


def install_dir() -> Path:
    """Directory holding installed data: under ``$CARGO_HOME`` or ``~/.cargo``."""
    cargo_home = os.environ.get("CARGO_HOME")
    if cargo_home is not None:
        return Path(cargo_home) / INSTALL_DIR_NAME
    return home_dir() / ".cargo" / INSTALL_DIR_NAME


def checkouts_dir() -> Path:
    return install_dir() / "checkouts"


def tools_dir() -> Path:
    return install_dir() / "tools"


def temp_dir() -> Path:
    return Path(tempfile.gettempdir()) / TEMP_DIR_NAME


def _is_verbatim(root: PurePath) -> bool:
    return str(root).startswith(_VERBATIM_PREFIX)


def prefix_path(root: str | os.PathLike, path: str | os.PathLike) -> PurePath:
    """Join ``path`` onto ``root``, resolving ``.``/``..`` lexically for verbatim roots."""
    root = root if isinstance(root, PurePath) else Path(root)
    if not _is_verbatim(root):
        return root / path
    win_root = PureWindowsPath(str(root))
    buf = list(win_root.parts)
    for component in PureWindowsPath(os.fspath(path)).parts:
        if component in ("\\", "/"):
            del buf[1:]
        elif component == ".":
            continue
        elif component == "..":
            if buf:
                buf.pop()
        else:
            buf.append(component)
    return PureWindowsPath(*buf)


def unprefix_path(root: str | os.PathLike, path: str | os.PathLike) -> PurePath:
    """Strip ``root`` from the front of ``path``."""
    root = root if isinstance(root, PurePath) else Path(root)
    path = path if isinstance(path, PurePath) else Path(path)
    try:
        return path.relative_to(root)
    except ValueError:
        raise PathNotPrefixed(path, root) from None


def relativize_path(
    abs_path: str | os.PathLike, abs_relative_to: str | os.PathLike
) -> Path:
    """Express ``abs_path`` relative to ``abs_relative_to``."""
    abs_path, abs_relative_to = Path(abs_path), Path(abs_relative_to)
    for candidate in (abs_path, abs_relative_to):
        if not candidate.is_absolute():
            raise ValueError(f"path {_quote(candidate)} isn't absolute")
    common = next(
        (c for c in (abs_relative_to, *abs_relative_to.parents) if abs_path.is_relative_to(c)),
        None,
    )
    if common is None:
        raise ValueError(
            f"{_quote(abs_path)} and {_quote(abs_relative_to)} have no common root"
        )
    ups = [".."] * len(abs_relative_to.relative_to(common).parts)
    rel_path = Path(*ups, *abs_path.relative_to(common).parts)
    log.info("%r relative to %r is %r", abs_path, abs_relative_to, rel_path)
    return rel_path


def normalize_path(path: str | os.PathLike) -> Path:
    """Canonicalize an existing path, or make a missing one absolute lexically."""
    path = Path(path)
    if path.exists():
        try:
            return path.resolve(strict=True)
        except (OSError, RuntimeError) as cause:
            raise NormalizationError(
                f"Failed to canonicalize existing path {_quote(path)}: {cause}", path, cause
            ) from cause
    try:
        return Path(os.path.abspath(path))
    except OSError as cause:
        raise NormalizationError(
            f"Failed to normalize non-existent path {_quote(path)}: {cause}", path, cause
        ) from cause


def _simplified(path: Path) -> Path:
    text = str(path)
    if text.startswith(_VERBATIM_PREFIX):
        rest = text[len(_VERBATIM_PREFIX):]
        if len(rest) >= 2 and rest[1] == ":" and rest[0].isalpha():
            return Path(rest)
    return path


def under_root(path: str | os.PathLike, root: str | os.PathLike) -> bool:
    """Whether ``root / path`` stays inside ``root`` once normalized."""
    root = _simplified(Path(root))
    norm = _simplified(normalize_path(root / path))
    return norm.is_relative_to(root)


def _modified_ns(path: Path) -> int:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return 0


def last_modified(first: str | os.PathLike, second: str | os.PathLike) -> Path:
    """Return whichever path was modified later; ``first`` on a tie."""
    first, second = Path(first), Path(second)
    if _modified_ns(first) < _modified_ns(second):
        return second
    return first