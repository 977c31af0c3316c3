"""
SREST Server

Owns the route table and a Flask application used as the multiplexer.

Example:
    from srest import Server, ViewStore, static

    views = ViewStore()
    views.load("templates")

    m = Server(views=views)
    m.get("/static/*filepath", static("/static", "static"))
    m.get("/", home)
    m.get("/home", home, auth)
    m.use("/v1/api/friends", FriendAPI())

    m.run(7000).get()  # blocks until SIGINT or SIGTERM
"""

import logging
import os
import queue
import signal
import threading
from typing import Callable, Dict, Optional

import click
from flask import Flask, request
from werkzeug.serving import make_server

from srest.config import Config, Options
from srest.core.paths import to_router_syntax
from srest.core.router import Route, RouteTable
from srest.errors import ConfigurationError, TemplateNotFoundError
from srest.helpers import DEFAULT_FUNC_MAP
from srest.logging import configure_logging
from srest.utils import ensure_port_available
from srest.views import ViewStore, split_dirs

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class Server:
    """
    REST server.

    Lifecycle: routes are registered from one thread, then run() compiles
    them into the Flask URL map exactly once and starts listening.
    """

    def __init__(
        self,
        options: Optional[Options] = None,
        config=None,
        app: Optional[Flask] = None,
        views: Optional[ViewStore] = None,
    ):
        """
        Initialize the server.

        Args:
            options: Listener options (defaults to Options.from_config)
            config: Configuration class (defaults to Config)
            app: Flask application to register routes on
            views: ViewStore shared with handlers that render. Without
                one, templates are loaded from config.VIEWS_DIR when
                those directories exist
        """
        self.config = config or Config
        configure_logging(self.config)
        self.options = options or Options.from_config(self.config)
        self.app = app if app is not None else Flask(__name__, static_folder=None)
        self.views = views if views is not None else self._default_views()
        if self.config.DEBUG:
            self.views.debug(True)
        self.table = RouteTable(self.config)

        self._bound = 0
        self._server = None
        self._thread: Optional[threading.Thread] = None
        self._previous_handlers: Dict[int, object] = {}

    def _default_views(self) -> ViewStore:
        views = ViewStore()
        dirs = split_dirs(self.config.VIEWS_DIR or "")
        missing = [d for d in dirs if not os.path.isdir(d)]
        if not dirs or missing:
            logger.debug(f"Views not loaded, directories not found: {', '.join(missing) or '(none)'}")
            return views
        views.load(dirs, DEFAULT_FUNC_MAP)
        return views

    def get(self, uri: str, handler: Callable, *middlewares: Callable) -> None:
        """Register a GET endpoint; it also answers on ``uri + "/"``."""
        self.table.add("GET", uri, handler, *middlewares)

    def post(self, uri: str, handler: Callable, *middlewares: Callable) -> None:
        """Register a POST endpoint."""
        self.table.add("POST", uri, handler, *middlewares)

    def put(self, uri: str, handler: Callable, *middlewares: Callable) -> None:
        """Register a PUT endpoint."""
        self.table.add("PUT", uri, handler, *middlewares)

    def delete(self, uri: str, handler: Callable, *middlewares: Callable) -> None:
        """Register a DELETE endpoint."""
        self.table.add("DELETE", uri, handler, *middlewares)

    def use(self, uri: str, resource, *middlewares: Callable) -> None:
        """Register the five handlers of a Resource under ``uri``."""
        self.table.use(uri, resource, *middlewares)

    def compile(self) -> int:
        """
        Register every route with Flask, most specific pattern first.

        Returns:
            Number of Flask rules added

        Raises:
            UnsupportedMethodError: A route uses an unknown HTTP method
        """
        count = self.table.compile(self._bind)
        logger.info(f"Compiled {count} routes")
        return count

    def _bind(self, route: Route) -> None:
        rule = to_router_syntax(route.pattern)
        self._bound += 1
        endpoint = f"srest_{self._bound}_{route.method.lower()}"

        self.app.add_url_rule(
            rule,
            endpoint=endpoint,
            view_func=self._view(route),
            methods=[route.method],
        )

        if self.config.VERBOSE_LOGGING:
            logger.debug(f"  {route.method:7} {rule}")

    def _view(self, route: Route) -> Callable:
        handler = route.handler
        response_class = self.app.response_class

        def view(**path_params):
            response = response_class()
            try:
                result = handler(request, response)
            except TemplateNotFoundError as e:
                # render() already wrote the error body
                logger.error(f"{route.method} {request.path}: {e}")
                return response
            return response if result is None else result

        view.__name__ = getattr(handler, "__name__", "handler")
        view.__doc__ = handler.__doc__ or f"{route.method} {route.pattern}"
        return view

    @property
    def port(self) -> Optional[int]:
        """Port the listener is bound to, or None before run()."""
        if self._server is None:
            return None
        return self._server.server_address[1]

    def run(self, port: Optional[int] = None) -> "queue.SimpleQueue[signal.Signals]":
        """
        Compile routes, start listening in the background and return a
        queue that receives SIGINT and SIGTERM.

            server.run(7000).get()

        Args:
            port: Port to bind (default: config.PORT, 0 picks a free one)

        Returns:
            Queue of received termination signals

        Raises:
            ConfigurationError: Routes could not be compiled
            OSError: The port could not be bound
        """
        port = self.config.PORT if port is None else port

        try:
            self.compile()
        except ConfigurationError as e:
            logger.critical(f"Run : register handlers : err [{e}]")
            raise

        ensure_port_available(self.options.host, port)

        ssl_context = None
        if self.options.use_tls:
            ssl_context = (self.options.tls_cert, self.options.tls_key)

        self._server = make_server(
            self.options.host,
            port,
            self.app,
            threaded=True,
            ssl_context=ssl_context,
        )
        self._thread = threading.Thread(
            target=self._serve,
            args=(self._server,),
            name=f"srest-listener-{self.port}",
            daemon=True,
        )
        self._thread.start()

        signals = self._subscribe()

        scheme = "https" if self.options.use_tls else "http"
        logger.info(f"Listening on {scheme}://{self.options.host}:{self.port}")
        if self.config.VERBOSE_LOGGING:
            click.secho(f"[OK] Listening on {scheme}://{self.options.host}:{self.port}", fg="green")

        return signals

    @staticmethod
    def _serve(server) -> None:
        try:
            server.serve_forever()
        except Exception:
            logger.exception("srest : Run : listener stopped")

    def _subscribe(self) -> "queue.SimpleQueue[signal.Signals]":
        signals: "queue.SimpleQueue[signal.Signals]" = queue.SimpleQueue()

        if threading.current_thread() is not threading.main_thread():
            logger.warning("run() called outside the main thread, termination signals will not be delivered")
            return signals

        def notify(signum, frame):
            signals.put(signal.Signals(signum))

        for signum in TERMINATION_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, notify)
        return signals

    def close(self) -> None:
        """
        Stop the listener and restore the previous signal handlers.

        In-flight requests are not drained.
        """
        for signum, previous in self._previous_handlers.items():
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous_handlers.clear()

        server, self._server = self._server, None
        if server is not None:
            server.shutdown()
            server.server_close()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
