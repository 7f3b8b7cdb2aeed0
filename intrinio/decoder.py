"""
Response Decoder

Maps a 2xx response body onto the response shape declared by an endpoint binding:

    ResponseShape.OBJECT - a single JSON object   -> one model instance
    ResponseShape.LIST   - a JSON array           -> list of model instances
    ResponseShape.PAGE   - {"data": [...], ...}   -> Page[model]

A body that is not JSON, or whose top-level shape does not match (an object
where an array was expected or vice versa), raises DecodeError. Nothing is
coerced silently. Sequence order is preserved exactly as returned.
"""

import json
from enum import Enum
from typing import Any, List, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from core.schemas import Page
from intrinio.errors import DecodeError


class ResponseShape(str, Enum):
    OBJECT = "object"
    LIST = "list"
    PAGE = "page"


def _load_json(body: bytes) -> Any:
    if not body:
        raise DecodeError("Empty response body")
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e


def decode(body: bytes, response_type: Type[BaseModel], shape: ResponseShape) -> Any:
    """
    Decode a response body into the declared response shape.

    Args:
        body: Raw response body
        response_type: Pydantic model of a single item
        shape: Declared top-level shape

    Returns:
        Model instance, list of model instances, or Page of model instances

    Raises:
        DecodeError: If the body is not JSON or does not match the declared shape

    Example:
        >>> decode(b'{"date": "2020-01-02", "close": 300.35}', Price, ResponseShape.OBJECT)
        Price(date=datetime.date(2020, 1, 2), ..., close=300.35, ...)
    """
    doc = _load_json(body)

    try:
        if shape == ResponseShape.OBJECT:
            if not isinstance(doc, dict):
                raise DecodeError(
                    f"Expected a JSON object for {response_type.__name__}, got {type(doc).__name__}"
                )
            return response_type.model_validate(doc)

        if shape == ResponseShape.LIST:
            if not isinstance(doc, list):
                raise DecodeError(
                    f"Expected a JSON array of {response_type.__name__}, got {type(doc).__name__}"
                )
            return TypeAdapter(List[response_type]).validate_python(doc)

        if shape == ResponseShape.PAGE:
            if not isinstance(doc, dict) or not isinstance(doc.get("data"), list):
                raise DecodeError(
                    f"Expected a paged object with a 'data' array of {response_type.__name__}"
                )
            return Page[response_type].model_validate(doc)

    except ValidationError as e:
        raise DecodeError(
            f"Response does not match {response_type.__name__}: {e.error_count()} validation error(s)\n{e}"
        ) from e

    raise DecodeError(f"Unsupported response shape: {shape!r}")
