"""Fluent HTTP request builder on top of httpx."""

from ._config import Config
from ._decoders import (
    BODY_DECODERS,
    BodyDecoder,
    FormDecoder,
    JsonDecoder,
    TextDecoder,
    decoder_for,
)
from ._providers import (
    BODY_PROVIDERS,
    BodyProvider,
    FormProvider,
    JsonProvider,
    TextProvider,
    provider_for,
)
from ._requist import Requist, new
from ._utils import (
    is_valid_base,
    is_valid_hostname,
    is_valid_scheme,
    normalize_base,
    resolve_path,
    setup_logging,
)
from ._utils.constants import (
    DEFAULT_TIMEOUT,
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
)
from .models import (
    BaseUrlInvalidError,
    BodyDecodeError,
    BodyEncodeError,
    HttpMethod,
    RequistError,
)

__all__ = [
    "BODY_DECODERS",
    "BODY_PROVIDERS",
    "BaseUrlInvalidError",
    "BodyDecodeError",
    "BodyDecoder",
    "BodyEncodeError",
    "BodyProvider",
    "Config",
    "DEFAULT_TIMEOUT",
    "FORM_CONTENT_TYPE",
    "FormDecoder",
    "FormProvider",
    "HttpMethod",
    "JSON_CONTENT_TYPE",
    "JsonDecoder",
    "JsonProvider",
    "Requist",
    "RequistError",
    "TEXT_CONTENT_TYPE",
    "TextDecoder",
    "TextProvider",
    "decoder_for",
    "is_valid_base",
    "is_valid_hostname",
    "is_valid_scheme",
    "new",
    "normalize_base",
    "provider_for",
    "resolve_path",
    "setup_logging",
]
