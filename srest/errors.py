"""
SREST Errors

Exception taxonomy for the toolkit.

Setup-phase mistakes (duplicate routes, unsupported verbs, incomplete
resources) derive from ConfigurationError so an entry point can abort on
that single category. View errors come from template loading and rendering.
"""


class SrestError(Exception):
    """Base class for every error raised by srest."""


class ConfigurationError(SrestError):
    """Route setup is wrong. Never recoverable at runtime."""


class DuplicateRouteError(ConfigurationError):
    """Two routes share the same method and variable-normalized pattern."""

    def __init__(self, method: str, uri: str):
        self.method = method
        self.uri = uri
        super().__init__(f"duplicated definition: {method} {uri}")


class UnsupportedMethodError(ConfigurationError):
    """A route carries an HTTP method the router cannot bind."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"method not found: {method}")


class InvalidPatternError(ConfigurationError):
    """A route pattern has variable segments the router cannot bind."""

    def __init__(self, method: str, uri: str, segments):
        self.method = method
        self.uri = uri
        self.segments = list(segments)
        super().__init__(f"invalid pattern: {method} {uri}: {', '.join(self.segments)}")


class ResourceContractError(ConfigurationError, TypeError):
    """An object passed to use() lacks one of the five resource handlers."""

    def __init__(self, resource, missing):
        self.resource = resource
        self.missing = list(missing)
        super().__init__(
            f"{type(resource).__name__} does not implement the resource "
            f"contract, missing: {', '.join(self.missing)}"
        )


class ViewError(SrestError):
    """Templates could not be loaded."""


class EmptyTemplateError(ViewError):
    """A template file has no content."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"empty file: {path}")


class TemplateNotFoundError(ViewError):
    """Render was asked for a template name the store does not hold."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"srest: template not found: {name}")


class ModelerNotImplementedError(SrestError, TypeError):
    """bind() target has no is_valid() method."""

    def __init__(self, model):
        self.model = model
        name = getattr(model, "__name__", type(model).__name__)
        super().__init__(f"srest: modeler interface not found on {name}")


__all__ = [
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
]
