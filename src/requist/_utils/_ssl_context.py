import os
import ssl
from typing import Any, Dict

import httpx

from .constants import (
    DEFAULT_KEEPALIVE_EXPIRY,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
)


def expand_path(path):
    """Expand environment variables and user home directory in path."""
    if not path:
        return path
    path = os.path.expandvars(path)
    path = os.path.expanduser(path)
    return path


def create_ssl_context():
    # Try truststore first (system certificates)
    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        # Fallback to manual certificate configuration
        import certifi

        ssl_cert_file = expand_path(os.environ.get("SSL_CERT_FILE"))
        requests_ca_bundle = expand_path(os.environ.get("REQUESTS_CA_BUNDLE"))
        ssl_cert_dir = expand_path(os.environ.get("SSL_CERT_DIR"))

        return ssl.create_default_context(
            cafile=ssl_cert_file or requests_ca_bundle or certifi.where(),
            capath=ssl_cert_dir,
        )


def default_transport(verify_ssl: bool = True) -> httpx.HTTPTransport:
    """Build the default transport with explicit pool limits and no retries."""
    return httpx.HTTPTransport(
        verify=create_ssl_context() if verify_ssl else False,
        limits=httpx.Limits(
            max_connections=DEFAULT_MAX_CONNECTIONS,
            max_keepalive_connections=DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=DEFAULT_KEEPALIVE_EXPIRY,
        ),
        retries=0,
    )


def get_httpx_client_kwargs(
    timeout: float, follow_redirects: bool = True
) -> Dict[str, Any]:
    """Get standardized httpx client configuration."""
    # HTTP_PROXY, HTTPS_PROXY, NO_PROXY are read by httpx by default
    return {
        "follow_redirects": follow_redirects,
        "timeout": timeout,
        "trust_env": True,
    }
