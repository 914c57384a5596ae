"""Assembling cargo command lines and their environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

PROGRAM = "cargo"
_PASSED_THROUGH = ("CARGO_TARGET_DIR", "CARGO_BUILD_TARGET_DIR")


def explicit_cargo_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """The target-directory variables from ``environ`` that cargo must see."""
    environ = os.environ if environ is None else environ
    return {name: environ[name] for name in _PASSED_THROUGH if name in environ}


@dataclass(frozen=True)
class CargoCommand:
    """A cargo invocation; ``args()`` gives the arguments after the program name."""

    subcommand: str
    verbose: bool = False
    package: str | None = None
    manifest_path: Path | None = None
    target: str | None = None
    no_default_features: bool = False
    features: Sequence[str] | None = None
    extra_args: Sequence[str] | None = None
    release: bool = False

    def __post_init__(self) -> None:
        if self.manifest_path is not None:
            object.__setattr__(
                self, "manifest_path", Path(self.manifest_path).resolve(strict=True)
            )

    def args(self) -> list[str]:
        args = [self.subcommand]
        if self.verbose:
            args.append("-vv")
        if self.package is not None:
            args += ["--package", self.package]
        if self.manifest_path is not None:
            if not self.manifest_path.exists():
                log.error("manifest path %r doesn't exist!", str(self.manifest_path))
            args += ["--manifest-path", str(self.manifest_path)]
        if self.target is not None:
            # Passing the target explicitly keeps the build output directory predictable.
            args += ["--target", self.target]
        if self.no_default_features:
            args.append("--no-default-features")
        if self.features is not None:
            args += ["--features", " ".join(self.features)]
        if self.extra_args is not None:
            args.extend(self.extra_args)
        if self.release:
            args.append("--release")
        return args

    def env(self, explicit_env: Mapping[str, str]) -> dict[str, str]:
        """Variables to set for the command; cargo's own directory settings win."""
        env = dict(explicit_env)
        env.update(explicit_cargo_env())
        return env