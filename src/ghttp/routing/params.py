"""Path parameter converters for route segments like ``{id:int}``.

Converters only constrain what a segment matches. Captured values stay
strings; ``Request.path_value()`` always returns ``str``.
"""

# regex pattern for each supported converter, most specific first;
# the router tries parameter edges in this order
CONVERTERS: dict[str, str] = {
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "str": r"[^/]+",
    "path": r".+",
}

CONVERTER_PRIORITY: dict[str, int] = {name: rank for rank, name in enumerate(CONVERTERS)}
