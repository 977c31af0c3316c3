"""
Path Normalization

Canonicalizes URI patterns, builds duplicate-detection keys and converts
":name" variables to werkzeug's "<name>" placeholders.
"""

import posixpath
import re
from typing import List

from srest.config import Config

_VAR = Config.Internal.PATH_VAR_MARKER
_CATCH_ALL = Config.Internal.CATCH_ALL_MARKER
_WILDCARD = Config.Internal.DEDUP_WILDCARD
_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def clean(path: str) -> str:
    """
    Return the shortest rooted path equivalent to ``path``.

    Collapses repeated slashes, resolves "." and ".." elements and drops the
    trailing slash. An empty path becomes "/".

    Examples:
        clean("")            -> "/"
        clean("users//1/")   -> "/users/1"
        clean("/a/b/../c")   -> "/a/c"
    """
    if not path:
        return "/"
    cleaned = posixpath.normpath("/" + path.strip())
    # normpath keeps a leading "//" as POSIX allows it
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def normalize_for_dedup(path: str) -> str:
    """
    Collapse variable segments of ``path`` to a wildcard.

    "/me/:id/name" and "/me/:x/name" share the key "/me/*/name". Used only
    to detect duplicate definitions, never for matching.
    """
    segments = []
    for segment in path.split("/"):
        if _VAR in segment or segment.startswith(_CATCH_ALL):
            segment = _WILDCARD
        segments.append(segment.strip())
    return "/".join(segments)


def to_router_syntax(path: str) -> str:
    """
    Convert ":name" segments to "<name>" and "*name" to "<path:name>".

    Examples:
        to_router_syntax("/users/:id")          -> "/users/<id>"
        to_router_syntax("/static/*filepath")   -> "/static/<path:filepath>"
    """
    segments = []
    for segment in path.split("/"):
        segment = segment.strip()
        if segment.startswith(_VAR):
            segment = f"<{segment[len(_VAR):]}>"
        elif segment.startswith(_CATCH_ALL) and len(segment) > len(_CATCH_ALL):
            segment = f"<path:{segment[len(_CATCH_ALL):]}>"
        segments.append(segment)
    return "/".join(segments)


def invalid_variables(path: str) -> List[str]:
    """
    Return the variable segments of ``path`` the router cannot bind.

    A variable needs a name made of letters, digits and underscores that
    does not start with a digit, and each name may appear only once.

        invalid_variables("/users/:id")        -> []
        invalid_variables("/users/:/x")        -> [":"]
        invalid_variables("/a/:user-id")       -> [":user-id"]
        invalid_variables("/a/:id/b/:id")      -> [":id"]
    """
    invalid = []
    seen = set()
    for segment in path.split("/"):
        segment = segment.strip()
        if segment.startswith(_VAR):
            name = segment[len(_VAR):]
        elif segment.startswith(_CATCH_ALL):
            name = segment[len(_CATCH_ALL):]
        else:
            continue
        if not _NAME.fullmatch(name) or name in seen:
            invalid.append(segment)
        seen.add(name)
    return invalid


def is_catch_all(path: str) -> bool:
    """True when the last segment of ``path`` is a "*name" catch-all."""
    return path.rsplit("/", 1)[-1].strip().startswith(_CATCH_ALL)
