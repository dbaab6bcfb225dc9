"""Request body providers.

A provider owns the payload of the next request and knows how to turn it
into bytes plus the matching ``Content-Type``. Variants are registered in
``BODY_PROVIDERS`` by content type.
"""

import dataclasses
import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Iterator, Optional
from urllib.parse import urlencode

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from ._utils import handle_encode_errors
from ._utils.constants import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
)
from .models.errors import BodyEncodeError


class BodyProvider(ABC):
    """Provides the body content attached to an outgoing request."""

    def __init__(self, payload: Any = None) -> None:
        self.payload = payload

    @property
    @abstractmethod
    def content_type(self) -> str:
        """The ``Content-Type`` of the encoded body."""

    @abstractmethod
    def body(self) -> Optional[bytes]:
        """Encode the payload.

        Returns:
            The encoded body, or ``None`` when nothing should be sent.

        Raises:
            BodyEncodeError: If the payload cannot be encoded.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(payload={self.payload!r})"


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        return dataclasses.asdict(payload)
    if isinstance(payload, Mapping):
        return payload
    if hasattr(payload, "__dict__") and not isinstance(payload, type):
        return {k: v for k, v in vars(payload).items() if not k.startswith("_")}

    raise BodyEncodeError(
        FORM_CONTENT_TYPE,
        f"cannot reflect {type(payload).__name__} into key/value pairs",
    )


def _form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _form_pairs(
    mapping: Mapping[str, Any], prefix: str = ""
) -> Iterator[tuple[str, str]]:
    for key, value in mapping.items():
        name = f"{prefix}[{key}]" if prefix else str(key)

        if isinstance(value, Mapping):
            yield from _form_pairs(value, name)
        elif isinstance(value, (list, tuple, set, frozenset)):
            for item in value:
                yield name, _form_value(item)
        else:
            yield name, _form_value(value)


class FormProvider(BodyProvider):
    """Encodes the payload fields as ``application/x-www-form-urlencoded``.

    Keys are emitted in alphabetical order, sequences become repeated keys and
    nested mappings use ``parent[child]`` names.

    >>> FormProvider({"Name": "Jonah Doe", "Age": 47}).body()
    b'Age=47&Name=Jonah+Doe'
    """

    @property
    def content_type(self) -> str:
        return FORM_CONTENT_TYPE

    def body(self) -> Optional[bytes]:
        with handle_encode_errors(self.content_type):
            pairs = sorted(_form_pairs(_as_mapping(self.payload)), key=lambda p: p[0])
            return urlencode(pairs).encode("utf-8")


class JsonProvider(BodyProvider):
    """Encodes the payload as compact JSON followed by a newline."""

    @property
    def content_type(self) -> str:
        return JSON_CONTENT_TYPE

    def body(self) -> Optional[bytes]:
        with handle_encode_errors(self.content_type):
            data = to_jsonable_python(self.payload, by_alias=True)
            encoded = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
            return f"{encoded}\n".encode("utf-8")


class TextProvider(BodyProvider):
    """Declares ``text/plain`` without serializing anything.

    This is a placeholder: the request carries the content type but an empty
    body.
    """

    @property
    def content_type(self) -> str:
        return TEXT_CONTENT_TYPE

    def body(self) -> Optional[bytes]:
        return None


BODY_PROVIDERS: dict[str, type[BodyProvider]] = {
    FORM_CONTENT_TYPE: FormProvider,
    JSON_CONTENT_TYPE: JsonProvider,
    TEXT_CONTENT_TYPE: TextProvider,
}


def provider_for(content_type: str, payload: Any) -> Optional[BodyProvider]:
    """Return the provider registered for ``content_type`` wrapping ``payload``."""
    provider_cls = BODY_PROVIDERS.get(content_type)
    if provider_cls is None:
        return None
    return provider_cls(payload)
