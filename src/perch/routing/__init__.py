"""Routing — an ordered list of pattern routes.

Routes are tested against the request path in declaration order, and
every route that matches gets a chance to handle the request.
"""

from perch.routing.route import WILDCARD, RequestHandler, Route, RouteMatch
from perch.routing.router import Router

__all__ = ["WILDCARD", "RequestHandler", "Route", "RouteMatch", "Router"]
