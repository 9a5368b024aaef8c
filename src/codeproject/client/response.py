"""Response decoding bridge -- maps an :class:`httpx.Response` body onto a typed result.

:func:`decode_json` turns a successful response into an instance of the
requested model. Empty bodies become ``None``; anything that is not valid
JSON, or does not fit the model, raises
:class:`~codeproject.exceptions.ResponseParseError` with the original
pydantic error chained.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from codeproject.exceptions import ResponseParseError

T = TypeVar("T")


@lru_cache(maxsize=64)
def _adapter(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


def has_body(response: httpx.Response) -> bool:
    """Return True when the response carries a non-whitespace body."""
    return bool(response.content and response.content.strip())


def decode_json(response: httpx.Response, model: type[T]) -> Optional[T]:
    """Validate the JSON body of *response* into *model*.

    Args:
        response: A response whose body has already been read.
        model: A pydantic model class or any type pydantic can validate
            (``dict``, ``list[Item]``, ...).

    Returns:
        The validated object, or ``None`` when the body is empty.

    Raises:
        ResponseParseError: If the body is not JSON or fails validation.
    """
    if not has_body(response):
        return None

    try:
        return _adapter(model).validate_json(response.content)
    except ValidationError as exc:
        name = getattr(model, "__name__", repr(model))
        raise ResponseParseError(
            f"Could not decode {name} from response body: {exc.error_count()} error(s)",
            body=response.text[:200],
        ) from exc
