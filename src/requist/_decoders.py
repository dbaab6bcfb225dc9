"""Response body decoders.

A decoder declares the ``Accept`` type it understands and fills a
caller-provided destination from a response body. Variants are registered in
``BODY_DECODERS`` by content type.
"""

import dataclasses
import io
import json
from abc import ABC, abstractmethod
from collections.abc import MutableMapping, MutableSequence
from typing import IO, Any, Optional
from urllib.parse import parse_qs

from pydantic import BaseModel, TypeAdapter

from ._utils import handle_decode_errors
from ._utils.constants import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
)


class BodyDecoder(ABC):
    """Decodes response bodies into caller-provided values."""

    @property
    @abstractmethod
    def accept_type(self) -> str:
        """The ``Accept`` type this decoder understands."""

    @abstractmethod
    def decode(self, stream: IO[bytes], destination: Any) -> None:
        """Read ``stream`` and write the result into ``destination``.

        Raises:
            BodyDecodeError: If the body is malformed or cannot be stored in
                ``destination``.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _assign_json(destination: Any, data: Any) -> None:
    if destination is None:
        raise TypeError("destination must not be None")

    if isinstance(destination, BaseModel):
        validated = type(destination).model_validate(data)
        for name in validated.model_fields_set:
            setattr(destination, name, getattr(validated, name))
        return

    if dataclasses.is_dataclass(destination) and not isinstance(destination, type):
        if not isinstance(data, dict):
            raise TypeError(
                f"cannot decode {type(data).__name__} into {type(destination).__name__}"
            )
        validated = TypeAdapter(type(destination)).validate_python(data)
        for field in dataclasses.fields(destination):
            if field.name in data:
                setattr(destination, field.name, getattr(validated, field.name))
        return

    if isinstance(destination, MutableMapping):
        if not isinstance(data, dict):
            raise TypeError(f"cannot decode {type(data).__name__} into a mapping")
        destination.update(data)
        return

    if isinstance(destination, MutableSequence) and not isinstance(
        destination, bytearray
    ):
        if not isinstance(data, list):
            raise TypeError(f"cannot decode {type(data).__name__} into a list")
        destination[:] = data
        return

    if hasattr(destination, "__dict__") and not isinstance(destination, type):
        if not isinstance(data, dict):
            raise TypeError(
                f"cannot decode {type(data).__name__} into {type(destination).__name__}"
            )
        attributes = vars(destination)
        for key, value in data.items():
            if key in attributes:
                setattr(destination, key, value)
        return

    raise TypeError(f"cannot decode into immutable {type(destination).__name__}")


def _write_raw(destination: Any, raw: bytes) -> bool:
    """Write ``raw`` into byte buffers, lists or writable streams."""
    if isinstance(destination, bytearray):
        destination.extend(raw)
        return True
    if isinstance(destination, MutableSequence):
        destination.append(raw.decode("utf-8", errors="replace"))
        return True
    if isinstance(destination, io.TextIOBase):
        destination.write(raw.decode("utf-8", errors="replace"))
        return True
    if hasattr(destination, "write"):
        destination.write(raw)
        return True
    return False


class JsonDecoder(BodyDecoder):
    """Decodes JSON bodies into models, dataclasses, mappings, lists or objects."""

    @property
    def accept_type(self) -> str:
        return JSON_CONTENT_TYPE

    def decode(self, stream: IO[bytes], destination: Any) -> None:
        with handle_decode_errors(self.accept_type):
            _assign_json(destination, json.load(stream))


class FormDecoder(BodyDecoder):
    """Decodes ``application/x-www-form-urlencoded`` bodies.

    Mapping destinations are updated with ``key -> [values]``. Byte buffers,
    lists and writable streams receive the raw body.
    """

    @property
    def accept_type(self) -> str:
        return FORM_CONTENT_TYPE

    def decode(self, stream: IO[bytes], destination: Any) -> None:
        with handle_decode_errors(self.accept_type):
            raw = stream.read()
            if isinstance(destination, MutableMapping):
                text = raw.decode("utf-8", errors="replace")
                destination.update(parse_qs(text, keep_blank_values=True))
            elif not _write_raw(destination, raw):
                raise TypeError(
                    f"cannot write form data into {type(destination).__name__}"
                )


class TextDecoder(BodyDecoder):
    """Copies ``text/plain`` bodies into byte buffers, lists or writable streams."""

    @property
    def accept_type(self) -> str:
        return TEXT_CONTENT_TYPE

    def decode(self, stream: IO[bytes], destination: Any) -> None:
        with handle_decode_errors(self.accept_type):
            raw = stream.read()
            if not _write_raw(destination, raw):
                raise TypeError(f"cannot write text into {type(destination).__name__}")


BODY_DECODERS: dict[str, type[BodyDecoder]] = {
    FORM_CONTENT_TYPE: FormDecoder,
    JSON_CONTENT_TYPE: JsonDecoder,
    TEXT_CONTENT_TYPE: TextDecoder,
}


def decoder_for(accept_type: str) -> Optional[BodyDecoder]:
    """Return a decoder for ``accept_type``, or ``None`` if it is not supported."""
    decoder_cls = BODY_DECODERS.get(accept_type)
    if decoder_cls is None:
        return None
    return decoder_cls()
