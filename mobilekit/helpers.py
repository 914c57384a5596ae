"""Template helper functions used when rendering project templates."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import Any

from .common import _debug_str, reverse_domain
from .paths import PathNotPrefixed
from .paths import prefix_path as _prefix_path
from .paths import unprefix_path as _unprefix_path

APP_KEY = "app"

_HTML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "&": "&amp;",
    "'": "&#x27;",
    "`": "&#x60;",
    "=": "&#x3D;",
}


class HelperError(ValueError):
    """A template helper was given something it cannot render."""


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _str_list(values: Any, helper: str) -> list[str]:
    if not isinstance(values, (list, tuple)) or not all(isinstance(v, str) for v in values):
        raise HelperError(f"`{helper}` helper wasn't given an array")
    return list(values)


def html_escape(value: Any) -> str:
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in _as_str(value))


def join(values: Any) -> str:
    return ", ".join(_str_list(values, "join"))


def quote_and_join(values: Any) -> str:
    return ", ".join(_debug_str(v) for v in _str_list(values, "quote-and-join"))


def quote_and_join_colon_prefix(values: Any) -> str:
    return ", ".join(
        _debug_str(f":{v}") for v in _str_list(values, "quote-and-join-colon-prefix")
    )


def _words(text: str):
    """Split text into words at non-alphanumerics and case boundaries."""
    for word in "".join(c if c.isalnum() else " " for c in text).split():
        start = 0
        mode = None  # None: at a boundary; otherwise "lower" or "upper"
        for i, ch in enumerate(word):
            if i + 1 == len(word):
                yield word[start:]
                break
            nxt = word[i + 1]
            next_mode = "lower" if ch.islower() else "upper" if ch.isupper() else mode
            if next_mode == "lower" and nxt.isupper():
                yield word[start:i + 1]
                start = i + 1
                mode = None
            elif mode == "upper" and ch.isupper() and nxt.islower():
                yield word[start:i]
                start = i
                mode = None
            else:
                mode = next_mode


def snake_case(value: Any) -> str:
    return "_".join(word.lower() for word in _words(_as_str(value)))


def reverse_domain_snake_case(value: Any) -> str:
    return snake_case(reverse_domain(_as_str(value)))


def dot_to_slash(value: Any) -> str:
    return _as_str(value).replace(".", "/")


def app_root(data: Mapping[str, Any]) -> str:
    """The ``app.root-dir`` entry of the template data."""
    app = data.get(APP_KEY)
    if app is None:
        raise HelperError("`app` missing from template data.")
    root = app.get("root-dir")
    if root is None:
        raise HelperError("`app.root-dir` missing from template data.")
    if not isinstance(root, (str, os.PathLike)):
        raise HelperError("`app.root-dir` contained invalid UTF-8.")
    return os.fspath(root)


def prefix_path(data: Mapping[str, Any], path: Any) -> str:
    return str(_prefix_path(app_root(data), _as_str(path)))


def unprefix_path(data: Mapping[str, Any], path: Any) -> str:
    try:
        return str(_unprefix_path(app_root(data), _as_str(path)))
    except PathNotPrefixed as err:
        raise HelperError(
            "Attempted to unprefix a path that wasn't in the app root dir."
        ) from err


def template_helpers(has_config: bool) -> dict[str, Callable[..., str]]:
    """Helpers by template name; the path helpers take the template data first."""
    helpers: dict[str, Callable[..., str]] = {
        "html-escape": html_escape,
        "join": join,
        "quote-and-join": quote_and_join,
        "quote-and-join-colon-prefix": quote_and_join_colon_prefix,
        "snake-case": snake_case,
        "reverse-domain": lambda value: reverse_domain(_as_str(value)),
        "reverse-domain-snake-case": reverse_domain_snake_case,
        "dot-to-slash": dot_to_slash,
    }
    if has_config:
        helpers["prefix-path"] = prefix_path
        helpers["unprefix-path"] = unprefix_path
    return helpers