"""
SREST - Tools for REST services and web sites

A small toolkit on top of Flask: a RESTful router with duplicate detection
and middleware chaining, a form binder with validation and a hot-reloading
Jinja2 view store.

Minimal Quick Start:
    from srest import Server, ViewStore, DEFAULT_FUNC_MAP, json

    views = ViewStore()
    views.load("templates", DEFAULT_FUNC_MAP)

    def home(request, response):
        views.render(response, "home.html", {"some": "Hello World"})

    m = Server(views=views)
    m.get("/", home)
    m.use("/v1/api/friends", FriendAPI())

    if __name__ == "__main__":
        m.run(7000).get()

Full Import Guide:
    from srest import Server, Resource, ViewStore, Config, Options
    from srest import bind, json, static, DEFAULT_FUNC_MAP
    from srest.errors import DuplicateRouteError, TemplateNotFoundError
    from srest.logging import get_logger
"""

__version__ = "0.2.0"

from srest.bind import Modeler, bind
from srest.config import Config, DevConfig, Options, ProdConfig
from srest.core import Resource, Route, RouteTable, chain
from srest.errors import (
    ConfigurationError,
    DuplicateRouteError,
    EmptyTemplateError,
    InvalidPatternError,
    ModelerNotImplementedError,
    ResourceContractError,
    SrestError,
    TemplateNotFoundError,
    UnsupportedMethodError,
    ViewError,
)
from srest.helpers import DEFAULT_FUNC_MAP, json, static
from srest.server import Server
from srest.views import ViewStore

__all__ = [
    # Core
    "Server",
    "Resource",
    "Route",
    "RouteTable",
    "chain",
    "ViewStore",
    "Config",
    "DevConfig",
    "ProdConfig",
    "Options",
    # Helpers
    "bind",
    "Modeler",
    "json",
    "static",
    "DEFAULT_FUNC_MAP",
    # Errors
    "SrestError",
    "ConfigurationError",
    "DuplicateRouteError",
    "UnsupportedMethodError",
    "InvalidPatternError",
    "ResourceContractError",
    "ViewError",
    "EmptyTemplateError",
    "TemplateNotFoundError",
    "ModelerNotImplementedError",
    # Version
    "__version__",
]
