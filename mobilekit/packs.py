"""Template packs: plain directories, or TOML specs that point elsewhere."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .git import Submodule, SubmoduleError
from .paths import NoHomeDir, expand_home, install_dir

log = logging.getLogger(__name__)

# Packs that only show in brainium builds, always at the top of the list.
BRAINIUM = ("brainstorm",)


def _debug(value: object) -> str:
    return json.dumps(str(value), ensure_ascii=False)


class PackLookupError(Exception):
    """A template pack could not be found or loaded."""


class FancyPackParseError(Exception):
    """A template pack spec could not be read or understood."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class FancyPackResolveError(Exception):
    """A template pack's directories could not be resolved."""


class ListError(Exception):
    """The available template packs could not be listed."""


def _platform_pack_dir() -> Path:
    return install_dir() / "templates" / "platforms"


def _app_pack_dir() -> Path:
    return install_dir() / "templates" / "apps"


@dataclass(frozen=True)
class SimplePack:
    """A pack that is just a directory."""

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    def resolve(self) -> list[Path]:
        """The directories making up this pack."""
        return [self.path]


def _parse_raw(data: dict[str, Any]) -> tuple[str, str | None, Submodule | None]:
    if "path" not in data:
        raise ValueError("missing field `path`")
    path = data["path"]
    if not isinstance(path, str):
        raise ValueError("invalid type for `path`: expected a string")
    base = data.get("base")
    if base is not None and not isinstance(base, str):
        raise ValueError("invalid type for `base`: expected a string")
    submodule = data.get("submodule")
    if submodule is not None:
        if not isinstance(submodule, dict):
            raise ValueError("invalid type for `submodule`: expected a table")
        submodule = Submodule.from_dict(submodule)
    return path, base, submodule


@dataclass(frozen=True)
class FancyPack:
    """A pack described by a TOML spec, optionally layered on a base pack."""

    path: Path
    base: SimplePack | FancyPack | None = None
    submodule: Submodule | None = None

    @classmethod
    def parse(cls, path: str | os.PathLike) -> FancyPack:
        """Load a pack spec from the TOML file at ``path``."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as cause:
            raise FancyPackParseError(
                f"Failed to read remote template pack spec {path}: {cause}", path
            ) from cause
        try:
            raw_path, base_name, submodule = _parse_raw(tomllib.loads(data.decode("utf-8")))
        except (ValueError, UnicodeDecodeError) as cause:
            raise FancyPackParseError(
                f"Failed to parse remote template pack spec {path}: {cause}", path
            ) from cause
        try:
            real_path = expand_home(raw_path)
        except NoHomeDir as err:
            raise FancyPackParseError(str(err), path) from err
        base = None
        if base_name is not None:
            try:
                base = lookup(path.parent, base_name)
            except PackLookupError as err:
                raise FancyPackParseError(
                    f"Failed to lookup base template pack: {err}", path
                ) from err
        pack = cls(real_path, base, submodule)
        log.info("template pack %r", pack)
        return pack

    def submodule_path(self) -> Path | None:
        return self.submodule.path if self.submodule is not None else None

    def resolve(self) -> list[Path]:
        """The base pack's directories followed by this pack's own."""
        if self.submodule is not None and self.submodule.resolved_name() is None:
            err = SubmoduleError(self.submodule, "name_missing")
            raise FancyPackResolveError(f"Failed to initialize submodule: {err}") from err
        if not self.path.exists():
            raise FancyPackResolveError(f"Template pack wasn't found at {self.path}")
        paths = self.base.resolve() if self.base is not None else []
        return [*paths, self.path]


Pack = SimplePack | FancyPack


def _check_path(name: str, path: Path) -> bool:
    log.info('checking for template pack "%s" at %r', name, str(path))
    if path.exists():
        log.info('found template pack "%s" at %r', name, str(path))
        return True
    return False


def lookup(directory: str | os.PathLike, name: str) -> Pack:
    """Find pack ``name`` in ``directory``, preferring ``<name>.toml`` over ``<name>``."""
    directory = Path(directory)
    toml_path = directory / f"{name}.toml"
    plain_path = directory / name
    if _check_path(name, toml_path):
        found = toml_path
    elif _check_path(name, plain_path):
        found = plain_path
    else:
        raise PackLookupError(
            f"Didn't find {name} template pack at {toml_path} or {plain_path}"
        )
    if found.suffix == ".toml":
        try:
            return FancyPack.parse(found)
        except FancyPackParseError as err:
            raise PackLookupError(str(err)) from err
    return SimplePack(found)


def lookup_platform(name: str) -> Pack:
    try:
        directory = _platform_pack_dir()
    except NoHomeDir as err:
        raise PackLookupError(str(err)) from err
    return lookup(directory, name)


def lookup_app(name: str) -> Pack:
    try:
        directory = _app_pack_dir()
    except NoHomeDir as err:
        raise PackLookupError(str(err)) from err
    return lookup(directory, name)


def list_app_packs(
    directory: str | os.PathLike | None = None, brainium: bool = False
) -> list[str]:
    """Sorted, distinct names of the app packs; brainium packs go first when enabled."""
    if directory is None:
        try:
            directory = _app_pack_dir()
        except NoHomeDir as err:
            raise ListError(str(err)) from err
    directory = Path(directory)
    try:
        entries = os.scandir(directory)
    except OSError as cause:
        raise ListError(f"Failed to read directory {_debug(directory)}: {cause}") from cause
    with entries:
        try:
            names = [entry.name for entry in entries]
        except OSError as cause:
            raise ListError(
                f"Failed to read entry in directory {_debug(directory)}: {cause}"
            ) from cause
    packs = sorted({Path(name).stem for name in names} - set(BRAINIUM))
    if brainium:
        return [*BRAINIUM, *packs]
    return packs