"""
Middleware Chaining

A middleware takes a handler and returns a new handler:

    def auth(next_handler):
        def handler(request, response):
            if request.headers.get("Authorization") != "Bearer 123456":
                response.status_code = 401
                return
            return next_handler(request, response)
        return handler
"""

from typing import Callable

Handler = Callable
Middleware = Callable[[Handler], Handler]


def chain(terminal: Handler, *middlewares: Middleware) -> Handler:
    """
    Wrap ``terminal`` with ``middlewares``.

    The first middleware listed runs first on the way in and finishes last
    on the way out. With no middlewares, ``terminal`` is returned as is.

    Args:
        terminal: Handler at the center of the chain
        *middlewares: Handler wrappers in execution order

    Returns:
        The composed handler
    """
    if not middlewares:
        return terminal

    handler = terminal
    for middleware in reversed(middlewares):
        handler = middleware(handler)
    return handler
