"""HTTP primitives: request, response sink, headers, query parameters."""

from ghttp.http.headers import Headers, MutableHeaders
from ghttp.http.query import QueryParams
from ghttp.http.request import Request
from ghttp.http.response import Response
from ghttp.http.writer import ResponseWriter, http_error

__all__ = [
    "Headers",
    "MutableHeaders",
    "QueryParams",
    "Request",
    "Response",
    "ResponseWriter",
    "http_error",
]
