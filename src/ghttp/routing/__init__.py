"""Routing — compiled route table keyed by method and path pattern.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from ghttp.routing.route import Route, RouteMatch, parse_pattern
from ghttp.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router", "parse_pattern"]
