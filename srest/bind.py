"""
SREST Form Binding

Decodes request key/value pairs into a pydantic model and runs the model's
own validation.

Usage:
    class Params(BaseModel):
        name: str = ""
        email: str = ""

        def is_valid(self):
            if not self.name:
                raise ValueError("invalid name")

    def create(request, response):
        try:
            params = bind(request.form, Params)
        except ValueError:
            response.status_code = 400
            return
"""

import types
from typing import Any, Mapping, Protocol, Type, TypeVar, Union, get_args, get_origin, runtime_checkable

from srest.errors import ModelerNotImplementedError

M = TypeVar("M")

_SEQUENCE_TYPES = (list, tuple, set, frozenset)
_UNION_TYPES = (Union, getattr(types, "UnionType", Union))


@runtime_checkable
class Modeler(Protocol):
    """A model that can check its own state."""

    def is_valid(self) -> None:
        """Raise with a descriptive error if the model is invalid."""


def _is_sequence(annotation: Any) -> bool:
    if annotation in _SEQUENCE_TYPES:
        return True
    origin = get_origin(annotation)
    if origin in _SEQUENCE_TYPES:
        return True
    if origin in _UNION_TYPES:
        return any(_is_sequence(arg) for arg in get_args(annotation) if arg is not type(None))
    return False


def _lookup(values: Mapping, key: str, many: bool):
    if hasattr(values, "getlist"):
        items = values.getlist(key)
    else:
        raw = values[key]
        items = list(raw) if isinstance(raw, (list, tuple)) else [raw]
    if many:
        return items
    return items[0] if items else None


def decode(values: Mapping, model: Type[M]) -> M:
    """
    Build ``model`` from ``values`` without running is_valid().

    List-typed fields collect every value of their key, other fields take
    the first one. Keys the model does not declare are ignored.
    """
    data = {}
    for name, field in model.model_fields.items():
        key = field.alias or name
        if key not in values:
            continue
        data[key] = _lookup(values, key, _is_sequence(field.annotation))
    return model.model_validate(data)


def bind(values: Mapping, model: Type[M]) -> M:
    """
    Decode ``values`` into ``model`` and validate the result.

    The Modeler check runs first: a model without is_valid() is rejected
    before any value is decoded, so a bad target fails the same way for
    every input. Decoding then runs, and is_valid() last.

    Args:
        values: werkzeug MultiDict (request.form, request.args) or mapping
        model: pydantic model class implementing is_valid()

    Returns:
        The validated model instance

    Raises:
        ModelerNotImplementedError: ``model`` has no is_valid()
        pydantic.ValidationError: A value could not be decoded
        Exception: Whatever is_valid() raises, unchanged
    """
    if not callable(getattr(model, "is_valid", None)):
        raise ModelerNotImplementedError(model)

    instance = decode(values, model)
    instance.is_valid()
    return instance
