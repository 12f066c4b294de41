"""
Declaration graph algorithms.

Resolution:
    - resolve_alias: Follow alias links to the first non-alias declaration
    - Resolution: Outcome of one resolution (target, category, failure flag)

Traversal:
    - RouteEnumerator: Bounded concurrent walk from every module root
    - enumerate_routes(): Run an enumerator, return routes and statistics
"""

from docroutes.core.graph.resolver import Resolution, resolve_alias
from docroutes.core.graph.traversal import RouteEnumerator, enumerate_routes

__all__ = [
    "Resolution",
    "resolve_alias",
    "RouteEnumerator",
    "enumerate_routes",
]
