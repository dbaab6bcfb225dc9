import json
from contextlib import contextmanager
from typing import Generator

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..models.errors import BodyDecodeError, BodyEncodeError


@contextmanager
def handle_encode_errors(content_type: str) -> Generator[None, None, None]:
    """Convert payload serialization failures into ``BodyEncodeError``.

    Raises:
        BodyEncodeError: When the payload cannot be represented as ``content_type``.
    """
    try:
        yield
    except BodyEncodeError:
        raise
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise BodyEncodeError(content_type, str(e)) from e


@contextmanager
def handle_decode_errors(content_type: str) -> Generator[None, None, None]:
    """Convert body parsing and assignment failures into ``BodyDecodeError``.

    Raises:
        BodyDecodeError: For malformed bodies, type mismatches and destinations
            that cannot be written to.
    """
    try:
        yield
    except BodyDecodeError:
        raise
    except json.JSONDecodeError as e:
        raise BodyDecodeError(content_type, f"malformed body: {e}") from e
    except ValidationError as e:
        raise BodyDecodeError(content_type, f"type mismatch: {e}") from e
    except (TypeError, ValueError, AttributeError) as e:
        raise BodyDecodeError(content_type, str(e)) from e
