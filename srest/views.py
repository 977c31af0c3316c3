"""
SREST Views

Loads directory trees of HTML templates into a named collection and renders
them by name, safely from many request threads at once.

Usage:
    from srest import ViewStore, DEFAULT_FUNC_MAP

    views = ViewStore()
    views.load("templates,themes/dark", DEFAULT_FUNC_MAP)

    def home(request, response):
        views.render(response, "home.html", {"some": "Hello World"})

Template names are paths relative to their root. Roots after the first are
namespaced with their last path segment, so "themes/dark/index.html" is
rendered as "dark/index.html". Any template can include or extend any other
by name.
"""

import logging
import os
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from jinja2 import DictLoader, Environment, Template, TemplateError

from srest._sync import RWLock
from srest.config import Config
from srest.errors import EmptyTemplateError, TemplateNotFoundError, ViewError

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = b"template view not found\n"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

Dirs = Union[str, Sequence[str]]


def split_dirs(dirs: Dirs) -> List[str]:
    """Split a comma-separated directory list into cleaned paths."""
    if isinstance(dirs, str):
        dirs = dirs.split(Config.Internal.VIEW_DIR_SEPARATOR)
    return [os.path.normpath(str(d).strip()) for d in dirs if str(d).strip()]


class ViewStore:
    """
    Named template collection with hot reload.

    Locking:
        _lock       read/write lock over the collection; render() reads,
                    the swap at the end of load() writes.
        _load_lock  serializes whole load() calls so two reloads never
                    interleave their directory walks.

    Debug mode reloads every template before each render. It is meant for
    local development only: renders running at the same time may each see
    a different generation of the collection, and every request pays for a
    full directory walk.
    """

    def __init__(self):
        self._lock = RWLock()
        self._load_lock = threading.Lock()
        self._templates: Dict[str, Template] = {}
        self._dirs: Optional[List[str]] = None
        self._func_map: Dict[str, Callable] = {}
        self._debug = False

    def debug(self, on: bool = True) -> None:
        """Enable or disable template reload on every render."""
        self._debug = bool(on)

    @property
    def is_debug(self) -> bool:
        return self._debug

    def names(self) -> List[str]:
        with self._lock.read():
            return sorted(self._templates)

    def __contains__(self, name: str) -> bool:
        with self._lock.read():
            return name in self._templates

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._templates)

    def load(self, dirs: Dirs, func_map: Optional[Mapping] = None) -> None:
        """
        Parse every .html file under ``dirs`` and replace the collection.

        Args:
            dirs: Directory, comma-separated directories or a sequence
            func_map: Callables exposed to every template as globals

        Raises:
            ViewError: A directory is missing or unreadable, or a template
                does not compile
            EmptyTemplateError: A template file is zero bytes

        On error the current collection is left untouched.
        """
        roots = split_dirs(dirs)
        funcs = dict(func_map or {})

        with self._load_lock:
            sources = self._read_sources(roots)

            env = Environment(loader=DictLoader(sources), autoescape=True, finalize=_finalize)
            env.globals.update(funcs)

            templates = {}
            for name in sources:
                try:
                    templates[name] = env.get_template(name)
                except TemplateError as exc:
                    raise ViewError(f"parse template {name}: {exc}") from exc

            with self._lock.write():
                self._templates = templates
                self._dirs = roots
                self._func_map = funcs

        logger.debug(f"Loaded {len(templates)} templates from {', '.join(roots)}")

    def reload(self) -> None:
        """Load again from the last directories and function map."""
        if self._dirs is None:
            return
        self.load(self._dirs, self._func_map)

    def _read_sources(self, roots: List[str]) -> Dict[str, str]:
        ext = Config.Internal.TEMPLATE_EXTENSION
        sources: Dict[str, str] = {}

        for index, root in enumerate(roots):
            if not os.path.isdir(root):
                raise ViewError(f"views directory not found: {root}")
            prefix = os.path.basename(root) if index > 0 else ""

            for dirpath, dirnames, filenames in os.walk(root, onerror=_walk_error):
                dirnames.sort()
                for filename in sorted(filenames):
                    if not filename.endswith(ext):
                        continue
                    path = os.path.join(dirpath, filename)
                    if not os.path.isfile(path):
                        continue
                    if os.path.getsize(path) == 0:
                        raise EmptyTemplateError(path)

                    name = Path(path).relative_to(root).as_posix()
                    if prefix:
                        name = f"{prefix}/{name}"
                    if name in sources:
                        logger.warning(f"Template {name} defined twice, keeping {path}")

                    with open(path, encoding="utf-8") as f:
                        sources[name] = f.read()

        return sources

    def render(self, response, name: str, data=None) -> None:
        """
        Render template ``name`` into ``response``.

        Args:
            response: werkzeug/Flask Response to write into
            name: Template name, e.g. "index.html" or "dark/index.html"
            data: Mapping whose keys become template variables, or any
                object; always reachable as ``data``

        Raises:
            TemplateNotFoundError: After writing a 500 "template view not
                found" body to ``response``
            jinja2.TemplateError: Template execution failed
        """
        if self._debug:
            self.reload()

        with self._lock.read():
            template = self._templates.get(name)
            if template is None:
                logger.warning(f"Template not found: {name}")
                response.status_code = 500
                response.content_type = "text/plain; charset=utf-8"
                response.headers["X-Content-Type-Options"] = "nosniff"
                response.stream.write(NOT_FOUND_BODY)
                raise TemplateNotFoundError(name)

            context = dict(data) if isinstance(data, Mapping) else {}
            context.setdefault("data", data)

            response.content_type = HTML_CONTENT_TYPE
            for chunk in template.generate(context):
                response.stream.write(chunk.encode("utf-8"))


def _walk_error(exc: OSError) -> None:
    raise ViewError(f"walk views: {exc}") from exc


def _finalize(value):
    # Booleans print as "true"/"false"
    if isinstance(value, bool):
        return "true" if value else "false"
    return value
