"""Command-line reporting: labelled, wrapped messages and argument handling."""

from __future__ import annotations

import abc
import enum
import os
import shutil
import sys
import textwrap
from dataclasses import dataclass

from termcolor import colored

_INDENT = "    "


class Label(enum.Enum):
    ERROR = "error"
    ACTION_REQUEST = "action request"
    VICTORY = "victory"

    def color(self) -> str:
        return {
            Label.ERROR: "light_red",
            Label.ACTION_REQUEST: "light_magenta",
            Label.VICTORY: "light_green",
        }[self]

    def exit_code(self) -> int:
        return 0 if self is Label.VICTORY else 1

    def __str__(self) -> str:
        return self.value


def _fill(text: str, width: int, indent: str = "") -> str:
    wrapper = textwrap.TextWrapper(
        width=max(width, len(indent) + 1),
        initial_indent=indent,
        subsequent_indent=indent,
        break_on_hyphens=False,
        break_long_words=False,
    )
    return "\n".join(wrapper.fill(line) for line in text.split("\n"))


def _should_colorize(stream) -> bool:
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


@dataclass(frozen=True)
class Report:
    label: Label
    msg: str
    details: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "msg", str(self.msg))
        object.__setattr__(self, "details", str(self.details))

    @classmethod
    def error(cls, msg, details) -> Report:
        return cls(Label.ERROR, msg, details)

    @classmethod
    def action_request(cls, msg, details) -> Report:
        return cls(Label.ACTION_REQUEST, msg, details)

    @classmethod
    def victory(cls, msg, details) -> Report:
        return cls(Label.VICTORY, msg, details)

    def exit_code(self) -> int:
        return self.label.exit_code()

    def format(self, width: int = 80, colorize: bool = False) -> str:
        """Render the report: a wrapped head line, then indented details."""
        prefix = f"{self.label.value}:"
        head = _fill(f"{prefix} {self.msg}", width)
        if colorize:
            color = self.label.color()
            cut = len(prefix)
            head = colored(head[:cut], color, attrs=["bold"], force_color=True) + (
                head[cut] + colored(head[cut + 1:], color, force_color=True)
                if len(head) > cut
                else ""
            )
        return f"{head}\n{_fill(self.details, width, _INDENT)}\n"

    def print(self, width: int | None = None) -> None:
        """Write the report to stderr for errors and stdout otherwise."""
        stream = sys.stderr if self.label is Label.ERROR else sys.stdout
        if width is None:
            width = shutil.get_terminal_size().columns
        stream.write(self.format(width, _should_colorize(stream)))
        stream.flush()


class Reportable(abc.ABC):
    """Something, usually an error, that can describe itself as a report."""

    @abc.abstractmethod
    def report(self) -> Report:
        raise NotImplementedError


def bin_name(name: str) -> str:
    return f"cargo {name}"


def get_args(name: str, argv: list[str] | None = None) -> list[str]:
    """Return the arguments, dropping the subcommand name cargo passes along."""
    args = list(sys.argv if argv is None else argv)
    if len(args) > 1 and args[1] == name:
        del args[1]
    return args