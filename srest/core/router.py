"""
Router Module

Registers routes, rejects duplicates and hands them to a multiplexer in a
deterministic, most-specific-first order.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Set, Tuple

from srest.config import Config
from srest.core.base import missing_resource_methods
from srest.core.chain import chain
from srest.core.paths import clean, invalid_variables, is_catch_all, normalize_for_dedup
from srest.errors import (
    DuplicateRouteError,
    InvalidPatternError,
    ResourceContractError,
    UnsupportedMethodError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """One (method, pattern) binding to a chained handler."""

    method: str
    pattern: str
    handler: Callable
    middlewares: Tuple[Callable, ...] = ()

    @property
    def dedup_key(self) -> str:
        return normalize_for_dedup(self.pattern)


class RouteTable:
    """
    In-memory route registry.

    Registration is expected to happen from a single thread before
    compile() is called; the table holds no lock.
    """

    def __init__(self, config=None):
        """
        Initialize the RouteTable.

        Args:
            config: Configuration class (defaults to Config)
        """
        self.config = config or Config
        self._keys: Set[str] = set()
        self._routes: List[Route] = []

    @property
    def routes(self) -> Tuple[Route, ...]:
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def add(self, method: str, uri: str, handler: Callable, *middlewares: Callable) -> None:
        """
        Register ``handler`` for ``method`` and ``uri``.

        GET routes also answer on ``uri + "/"`` so both client conventions
        reach the same handler without a redirect. Catch-all patterns
        already match any tail and get no such twin.

        Args:
            method: HTTP method (e.g., "GET")
            uri: URI pattern, variables written as ":name"
            handler: Callable taking (request, response)
            *middlewares: Handler wrappers, first listed runs first

        Raises:
            InvalidPatternError: If a variable segment has no usable name
            DuplicateRouteError: If the method and normalized pattern exist
        """
        method = method.upper()
        path = clean(uri)
        invalid = invalid_variables(path)
        if invalid:
            raise InvalidPatternError(method, uri, invalid)

        key = f"{method}:{normalize_for_dedup(path)}"
        if key in self._keys:
            raise DuplicateRouteError(method, uri)
        self._keys.add(key)

        chained = chain(handler, *middlewares)
        self._routes.append(Route(method, path, chained, middlewares))
        if method == "GET" and path != "/" and not is_catch_all(path):
            self._routes.append(Route(method, path + "/", chained, middlewares))

        logger.debug(f"Registered route: {method} {path}")

    def use(self, uri: str, resource, *middlewares: Callable) -> None:
        """
        Register the five RESTful handlers of ``resource`` under ``uri``.

            one     GET     uri/:id
            list    GET     uri
            create  POST    uri
            update  PUT     uri/:id
            delete  DELETE  uri/:id

        Raises:
            ResourceContractError: If ``resource`` lacks any handler
        """
        missing = missing_resource_methods(resource)
        if missing:
            raise ResourceContractError(resource, missing)

        base = uri.rstrip("/")
        item = f"{base}/{self.config.Internal.PATH_VAR_MARKER}id"
        self.add("GET", item, resource.one, *middlewares)
        self.add("GET", uri, resource.list, *middlewares)
        self.add("POST", uri, resource.create, *middlewares)
        self.add("PUT", item, resource.update, *middlewares)
        self.add("DELETE", item, resource.delete, *middlewares)

    def sorted_routes(self) -> List[Route]:
        """
        Return routes ordered by normalized pattern, descending.

        "/me/*/name" sorts before "/me/*" before "/me", so a multiplexer
        that matches by prefix sees the most specific pattern first.
        """
        return sorted(self._routes, key=lambda route: route.dedup_key, reverse=True)

    def compile(self, bind: Callable[[Route], None]) -> int:
        """
        Hand every route to ``bind`` and release the table.

        Args:
            bind: Called once per route, most specific pattern first

        Returns:
            Number of routes bound

        Raises:
            UnsupportedMethodError: If any route uses a method outside
                Config.Internal.SUPPORTED_HTTP_METHODS. Nothing is bound.
        """
        supported = self.config.Internal.SUPPORTED_HTTP_METHODS
        for route in self._routes:
            if route.method not in supported:
                raise UnsupportedMethodError(route.method)

        ordered = self.sorted_routes()
        for route in ordered:
            bind(route)

        self._keys = set()
        self._routes = []
        return len(ordered)
