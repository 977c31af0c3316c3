"""
Base Classes for SREST

Provides the resource base class users can inherit from.
"""

from typing import Iterable, List

RESOURCE_METHODS = ("one", "list", "create", "update", "delete")


class Resource:
    """
    Base class for RESTful resources.

    Server.use() binds the five handlers below to a base URI:

        one     GET     /uri/:id
        list    GET     /uri
        create  POST    /uri
        update  PUT     /uri/:id
        delete  DELETE  /uri/:id

    Every handler receives the request and the response to write into.
    The defaults answer 405 so subclasses only override what they serve.

    Example:
        class FriendAPI(Resource):
            def list(self, request, response):
                json(response, {"response": friends})
    """

    def _not_allowed(self, request, response):
        response.status_code = 405
        response.stream.write(b"method not allowed")

    def one(self, request, response):
        self._not_allowed(request, response)

    def list(self, request, response):
        self._not_allowed(request, response)

    def create(self, request, response):
        self._not_allowed(request, response)

    def update(self, request, response):
        self._not_allowed(request, response)

    def delete(self, request, response):
        self._not_allowed(request, response)


def missing_resource_methods(resource, methods: Iterable[str] = RESOURCE_METHODS) -> List[str]:
    """Return the resource handlers ``resource`` does not provide."""
    return [name for name in methods if not callable(getattr(resource, name, None))]
