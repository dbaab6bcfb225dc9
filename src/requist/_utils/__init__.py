from ._auth import encode_basic_auth
from ._errors import handle_decode_errors, handle_encode_errors
from ._logs import setup_logging
from ._request_spec import RequestSpec
from ._ssl_context import default_transport, get_httpx_client_kwargs
from ._url import (
    is_valid_base,
    is_valid_hostname,
    is_valid_scheme,
    normalize_base,
    resolve_path,
)
from ._user_agent import header_user_agent, user_agent_value

__all__ = [
    "RequestSpec",
    "default_transport",
    "encode_basic_auth",
    "get_httpx_client_kwargs",
    "handle_decode_errors",
    "handle_encode_errors",
    "header_user_agent",
    "is_valid_base",
    "is_valid_hostname",
    "is_valid_scheme",
    "normalize_base",
    "resolve_path",
    "setup_logging",
    "user_agent_value",
]
