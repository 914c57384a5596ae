"""Interactive prompts on standard input and output."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable

from termcolor import colored

_INDEX = re.compile(r"\+?[0-9]+")


def minimal(msg) -> str:
    """Print ``msg: `` and return the stripped reply; raise EOFError at end of input."""
    print(f"{msg}: ", end="", flush=True)
    line = sys.stdin.readline()
    if not line:
        raise EOFError("no input left to read")
    return line.strip()


def default(msg, default: str | None = None, default_color: str | None = None) -> str:
    """Prompt, showing ``default`` in parentheses and returning it on an empty reply."""
    if default is not None:
        shown = (
            colored(default, default_color, attrs=["bold"])
            if default_color is not None
            else default
        )
        msg = f"{msg} ({shown})"
    response = minimal(msg)
    if not response and default is not None:
        return default
    return response


def yes_no(msg, default: bool | None = None) -> bool | None:
    """Ask a yes/no question; an empty reply gives ``default``, nonsense gives None."""
    y_n = {True: "[Y/n]", False: "[y/N]", None: "[y/n]"}[default]
    response = minimal(f"{msg} {y_n}")
    if response.lower() == "y":
        return True
    if response.lower() == "n":
        return False
    if not response:
        return default
    print("That was neither a Y nor an N! You're pretty silly.")
    return None


def list_display_only(choices: Iterable) -> None:
    """Print numbered choices, or a placeholder if there are none."""
    choices = list(choices)
    if not choices:
        print("  -- none --")
        return
    for index, choice in enumerate(choices):
        print(f"  [{colored(str(index), 'green')}] {choice}")


def choose(header, choices: Iterable, noun, alternative: str | None, msg) -> int:
    """Show a numbered list and keep asking until a valid index is entered."""
    choices = list(choices)
    print(f"{header}:")
    list_display_only(choices)
    index_word = colored("index", "green")
    if alternative is not None:
        print(
            f"  Enter an {index_word} for a {noun} above, "
            f"or enter a {colored(alternative, 'cyan')} manually."
        )
    else:
        print(f"  Enter an {index_word} for a {noun} above.")
    while True:
        response = default(msg, "0" if len(choices) == 1 else None, "green")
        if not response:
            print("Not to be pushy, but you need to pick a device.")
        elif not _INDEX.fullmatch(response):
            print("Hey, that wasn't a number! You're silly.")
        elif int(response) >= len(choices):
            print("There's no device with an index that high.")
        else:
            return int(response)