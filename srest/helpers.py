"""
SREST Helper Functions

Response helpers, static file serving and the default template functions.
"""

import os
from typing import Any, Callable

from flask import json as flask_json
from flask import send_from_directory
from werkzeug.exceptions import NotFound

from srest.core.paths import clean

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


def cap(value: str) -> str:
    """Upper-case the first letter of ``value``."""
    if not value:
        return value
    return value[:1].upper() + value[1:]


def eqs(x: Any, y: Any) -> bool:
    """Compare two values by their string forms, so 1 == "1"."""
    return str(x) == str(y)


# Functions for ViewStore.load:
#   cap: capitalize strings
#   eqs: compare values of any two types
DEFAULT_FUNC_MAP = {
    "cap": cap,
    "eqs": eqs,
}


def json(response, value: Any) -> None:
    """
    Append ``value`` to ``response`` as JSON.

    Encoding goes through the current app's JSON provider, the one behind
    ``jsonify``, so dataclasses, dates and UUIDs encode the same way. The
    body is appended so middleware output written earlier is kept.

    Args:
        response: werkzeug/Flask Response to write into
        value: Any JSON-serializable value

    Example:
        def list_friends(request, response):
            json(response, {"response": friends})
    """
    response.content_type = JSON_CONTENT_TYPE
    response.stream.write(f"{flask_json.dumps(value)}\n".encode("utf-8"))


def static(uri: str, directory: str) -> Callable:
    """
    Handler serving the files of ``directory`` under ``uri``.

    The ``uri`` prefix is stripped from the request path before the file is
    looked up. Register it with a catch-all segment:

        server.get("/public/*filepath", static("/public", "assets"))

    Args:
        uri: URL prefix
        directory: Directory holding the files

    Returns:
        Handler taking (request, response)
    """
    prefix = clean(uri).rstrip("/") + "/"
    root = os.path.abspath(directory)

    def handler(request, response):
        if not request.path.startswith(prefix):
            raise NotFound()
        return send_from_directory(root, request.path[len(prefix):])

    handler.__name__ = f"static_{os.path.basename(root)}"
    return handler
