"""
SREST Core Module
"""

from srest.core.base import Resource
from srest.core.chain import chain
from srest.core.router import Route, RouteTable

__all__ = ["Resource", "Route", "RouteTable", "chain"]
