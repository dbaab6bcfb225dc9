from enum import Enum
from logging import getLogger

logger = getLogger("requist")


class HttpMethod(str, Enum):
    """The HTTP verbs a request can be sent with."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, name: "str | HttpMethod") -> "HttpMethod":
        """Map ``name`` to a verb, case-insensitively.

        Unrecognized names fall back to ``GET`` instead of raising.

        >>> HttpMethod.parse("post")
        <HttpMethod.POST: 'POST'>
        >>> HttpMethod.parse("invalidverb")
        <HttpMethod.GET: 'GET'>
        """
        if isinstance(name, HttpMethod):
            return name

        normalized = str(name).strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            logger.debug(f"Unknown HTTP method {name!r}, falling back to GET")
            return cls.GET
