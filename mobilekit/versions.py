"""Version numbers and parsing of ``rustc --version`` output."""

from __future__ import annotations

import json
import logging
import re
import sys
from dataclasses import dataclass

log = logging.getLogger(__name__)

_U32_MAX = 2**32 - 1
_TRIPLE_NAMES = ("major", "minor", "patch")
_DOUBLE_NAMES = ("major", "minor")
_RUSTC_COMMAND = "rustc --version"
_RUSTC_VERSION = re.compile(
    r"rustc (?P<version>(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(-(?P<flavor>\w+)(.(?P<candidate>\d+))?)?)"
    r"(?P<details> \((?P<hash>\w{9}) (?P<date>(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2}))\))?"
)


def _debug(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _parse_u32(text: str) -> int:
    """Parse an unsigned 32-bit integer with the same strictness as a native parser."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    digits = text[1:] if text.startswith("+") else text
    if not digits or any(c not in "0123456789" for c in digits):
        raise ValueError("invalid digit found in string")
    value = int(digits)
    if value > _U32_MAX:
        raise ValueError("number too large to fit in target type")
    return value


class VersionTripleError(ValueError):
    """A ``major[.minor][.patch]`` string could not be parsed."""

    def __init__(self, version: str, component: str | None = None, cause: Exception | None = None):
        self.version = version
        self.component = component
        self.cause = cause
        if component is None:
            message = (
                f"Failed to parse version string {_debug(version)}: "
                "string must be in format <major>[.minor][.patch]"
            )
        else:
            message = f"Failed to parse {component} version from {_debug(version)}: {cause}"
        super().__init__(message)


class VersionDoubleError(ValueError):
    """A ``major[.minor]`` string could not be parsed."""

    def __init__(self, version: str, component: str | None = None, cause: Exception | None = None):
        self.version = version
        self.component = component
        self.cause = cause
        if component is None:
            message = (
                f"Failed to parse version string {_debug(version)}: "
                "string must be in format <major>[.minor]"
            )
        else:
            message = f"Failed to parse {component} version from {_debug(version)}: {cause}"
        super().__init__(message)


def _component(text: str, version: str, name: str, error: type[ValueError]) -> int:
    try:
        return _parse_u32(text)
    except ValueError as cause:
        raise error(version, name, cause) from cause


@dataclass(frozen=True, order=True)
class VersionTriple:
    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> VersionTriple:
        parts = text.split(".")
        if len(parts) > len(_TRIPLE_NAMES):
            raise VersionTripleError(text)
        return cls(
            *(
                _component(part, text, name, VersionTripleError)
                for part, name in zip(parts, _TRIPLE_NAMES)
            )
        )

    @classmethod
    def from_match(cls, match: re.Match) -> tuple[VersionTriple, str]:
        """Build from a match with ``version``, ``major``, ``minor`` and ``patch`` groups."""
        version = match["version"]
        triple = cls(
            *(_component(match[name], version, name, VersionTripleError) for name in _TRIPLE_NAMES)
        )
        return triple, version


@dataclass(frozen=True, order=True)
class VersionDouble:
    major: int = 0
    minor: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    @classmethod
    def parse(cls, text: str) -> VersionDouble:
        parts = text.split(".")
        if len(parts) > len(_DOUBLE_NAMES):
            raise VersionDoubleError(text)
        return cls(
            *(
                _component(part, text, name, VersionDoubleError)
                for part, name in zip(parts, _DOUBLE_NAMES)
            )
        )


class RustVersionError(ValueError):
    """The compiler's version output could not be understood."""


@dataclass(frozen=True)
class RustVersionFlavor:
    flavor: str
    candidate: str | None = None


@dataclass(frozen=True)
class RustVersionDetails:
    hash: str
    date: tuple[int, int, int]


_LAST_GOOD_STABLE = VersionTriple(1, 45, 2)
_NEXT_GOOD_STABLE = VersionTriple(1, 49, 0)
_FIRST_GOOD_NIGHTLY = (2020, 10, 24)


@dataclass(frozen=True)
class RustVersion:
    triple: VersionTriple
    flavor: RustVersionFlavor | None = None
    # Absent when the toolchain was installed without rustup.
    details: RustVersionDetails | None = None

    def __str__(self) -> str:
        text = str(self.triple)
        if self.flavor is not None:
            text += f"-{self.flavor.flavor}"
            if self.flavor.candidate is not None:
                text += f".{self.flavor.candidate}"
        if self.details is not None:
            year, month, day = self.details.date
            text += f" ({self.details.hash} {year}-{month}-{day})"
        return text

    @classmethod
    def parse(cls, output: str) -> RustVersion:
        """Parse the output of ``rustc --version``."""
        match = _RUSTC_VERSION.search(output)
        if match is None:
            raise RustVersionError(
                f"Failed to check rustc version: {_debug(_RUSTC_COMMAND)} "
                f"output failed to match regex: {_debug(output)}"
            )
        try:
            triple, _ = VersionTriple.from_match(match)
        except VersionTripleError as err:
            raise RustVersionError(str(err)) from err

        flavor = None
        if match["flavor"] is not None:
            flavor = RustVersionFlavor(match["flavor"], match["candidate"])

        details = None
        if match["details"] is not None:
            date = match["date"]
            parts = []
            for name in ("year", "month", "day"):
                try:
                    parts.append(_parse_u32(match[name]))
                except ValueError as cause:
                    raise RustVersionError(
                        f"Failed to parse rustc release {name} from {_debug(date)}: {cause}"
                    ) from cause
            details = RustVersionDetails(match["hash"], tuple(parts))

        version = cls(triple, flavor, details)
        log.info("detected rustc version %s", version)
        return version

    def valid(self) -> bool:
        """Whether this toolchain is usable; only some releases are excluded, on macOS."""
        if sys.platform != "darwin":
            return True
        old_good = self.triple <= _LAST_GOOD_STABLE
        if self.triple < _NEXT_GOOD_STABLE:
            return old_good
        if self.details is None:
            log.warning(
                "output of `rustc --version` didn't contain date info; continuing with "
                "the assumption that the release date is at least 2020-10-24"
            )
            return True
        return old_good or self.details.date >= _FIRST_GOOD_NIGHTLY