"""
Tests for response helpers and template functions
"""

import uuid
from dataclasses import dataclass

import pytest
from flask import Response

from srest import json, static
from srest.helpers import cap, eqs


class TestTemplateFunctions:
    @pytest.mark.parametrize(
        "value, expected",
        [("i am lowercase", "I am lowercase"), ("x", "X"), ("", ""), ("Already", "Already")],
    )
    def test_cap(self, value, expected):
        assert cap(value) == expected

    @pytest.mark.parametrize(
        "x, y, expected",
        [(1, "1", True), ("a", "a", True), (1.5, "1.5", True), (1, 2, False), (None, "", False)],
    )
    def test_eqs(self, x, y, expected):
        assert eqs(x, y) is expected


def test_json():
    response = Response()

    json(response, {"response": ["a", "b"]})

    assert response.headers["Content-Type"] == "application/json; charset=UTF-8"
    assert response.get_data(as_text=True) == '{"response": ["a", "b"]}\n'


def test_json_scalar():
    response = Response()

    json(response, True)

    assert response.get_data(as_text=True) == "true\n"


class TestStatic:
    @pytest.fixture
    def client(self, server, tmp_path):
        assets = tmp_path / "assets"
        (assets / "css").mkdir(parents=True)
        (assets / "css" / "site.css").write_text("body {}")
        (assets / "robots.txt").write_text("User-agent: *")

        server.get("/public/*filepath", static("/public", str(assets)))
        server.compile()
        return server.app.test_client()

    def test_serves_file(self, client):
        res = client.get("/public/robots.txt")

        assert res.status_code == 200
        assert res.get_data(as_text=True) == "User-agent: *"

    def test_serves_nested_file(self, client):
        res = client.get("/public/css/site.css")

        assert res.status_code == 200
        assert res.mimetype == "text/css"

    def test_missing_file(self, client):
        assert client.get("/public/nope.txt").status_code == 404

    def test_path_escape_is_rejected(self, client):
        assert client.get("/public/../secret.txt").status_code == 404

    def test_prefix_mismatch(self, tmp_path):
        handler = static("/public", str(tmp_path))

        class FakeRequest:
            path = "/other/file.txt"

        from werkzeug.exceptions import NotFound

        with pytest.raises(NotFound):
            handler(FakeRequest(), Response())


def test_json_uses_app_provider(server):
    @dataclass
    class Friend:
        name: str
        id: uuid.UUID

    friend_id = uuid.UUID("12345678-1234-5678-1234-567812345678")

    def friend(request, response):
        json(response, {"response": Friend("ana", friend_id), "count": 1})

    server.get("/friend", friend)
    server.compile()
    res = server.app.test_client().get("/friend")

    assert res.content_type == "application/json; charset=UTF-8"
    assert res.get_data(as_text=True) == (
        '{"count": 1, "response": {"id": "12345678-1234-5678-1234-567812345678", "name": "ana"}}\n'
    )
