from os import environ as env

from pydantic import BaseModel, Field

from ._utils.constants import (
    DEFAULT_TIMEOUT,
    ENV_DEBUG,
    ENV_DISABLE_SSL_VERIFY,
    ENV_TIMEOUT,
)

_TRUTHY = ("1", "true", "yes", "on")


class Config(BaseModel):
    """Transport settings shared by every request a client sends."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    verify_ssl: bool = True
    follow_redirects: bool = True
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Build a configuration from ``REQUIST_*`` environment variables."""
        values: dict[str, object] = {}

        timeout = env.get(ENV_TIMEOUT)
        if timeout:
            values["timeout"] = timeout
        if env.get(ENV_DISABLE_SSL_VERIFY, "").lower() in _TRUTHY:
            values["verify_ssl"] = False
        if env.get(ENV_DEBUG, "").lower() in _TRUTHY:
            values["debug"] = True

        return cls.model_validate(values)
