from .errors import (
    BaseUrlInvalidError,
    BodyDecodeError,
    BodyEncodeError,
    RequistError,
)
from .http_method import HttpMethod

__all__ = [
    "BaseUrlInvalidError",
    "BodyDecodeError",
    "BodyEncodeError",
    "HttpMethod",
    "RequistError",
]
