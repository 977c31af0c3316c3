"""
Unit tests for middleware chaining
"""

from srest.core.chain import chain


def recorder(log, name):
    def middleware(next_handler):
        def handler(request, response):
            log.append(f"{name}:before")
            next_handler(request, response)
            log.append(f"{name}:after")
        return handler
    return middleware


def test_no_middleware_returns_terminal():
    def terminal(request, response):
        pass

    assert chain(terminal) is terminal


def test_onion_order():
    """First middleware listed runs first and completes last"""
    log = []

    def terminal(request, response):
        log.append("terminal")

    handler = chain(terminal, recorder(log, "a"), recorder(log, "b"))
    handler(None, None)

    assert log == ["a:before", "b:before", "terminal", "b:after", "a:after"]


def test_middleware_can_short_circuit():
    log = []

    def terminal(request, response):
        log.append("terminal")

    def deny(next_handler):
        def handler(request, response):
            log.append("denied")
        return handler

    chain(terminal, deny, recorder(log, "inner"))(None, None)

    assert log == ["denied"]


def test_chain_does_not_mutate_handlers():
    def terminal(request, response):
        return "terminal"

    middleware = recorder([], "a")
    composed = chain(terminal, middleware)

    assert composed is not terminal
    assert terminal(None, None) == "terminal"
