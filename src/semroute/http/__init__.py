"""HTTP primitives: immutable request, response, headers and query params."""

from semroute.http.headers import Headers
from semroute.http.query import QueryParams
from semroute.http.request import Request
from semroute.http.response import Response, json_response

__all__ = ["Headers", "QueryParams", "Request", "Response", "json_response"]
