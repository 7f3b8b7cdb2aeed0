"""
Parameter Encoder

Turns a request descriptor into the ordered (key, value) pairs sent to Intrinio,
as a query string for GET or a form body for POST.

Encoding rules:
- Fields are emitted in declaration order, under their wire name (alias)
- Unset fields (None) and empty lists are omitted entirely, never sent as ""
- bool -> "true"/"false", enums -> their value, dates -> YYYY-MM-DD
- Lists -> one comma-delimited value, or one key per element for fields
  declared with json_schema_extra={"repeat": True}
- Structured list elements (e.g. screener conditions) -> one token per element,
  joining the element's fields in declaration order with its `token_separator`

Encoding is a pure function of the descriptor value.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, List, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel

from core.utils.dates import format_wire_date


LIST_DELIMITER = ","
DEFAULT_TOKEN_SEPARATOR = "~"

Params = List[Tuple[str, str]]


def format_scalar(value: Any) -> str:
    """
    Format a single scalar for the wire.

    Examples:
        >>> format_scalar(True)
        'true'
        >>> format_scalar(date(2020, 1, 2))
        '2020-01-02'
        >>> format_scalar(SearchOperator.GT)
        'gt'
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_scalar(value.value)
    if isinstance(value, (dt.date, dt.datetime)):
        return format_wire_date(value)
    if isinstance(value, (int, float, Decimal, str)):
        return str(value)
    if isinstance(value, BaseModel):
        return format_token(value)
    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def format_token(element: BaseModel) -> str:
    """Encode a structured element as one composite token, fields in declaration order."""
    separator = getattr(element, "token_separator", DEFAULT_TOKEN_SEPARATOR)
    parts = [
        format_scalar(getattr(element, name))
        for name in type(element).model_fields
    ]
    return separator.join(parts)


def _is_repeated(field_info) -> bool:
    extra = field_info.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get("repeat"))


def encode(request: BaseModel) -> Params:
    """
    Encode a request descriptor into ordered (key, value) pairs.

    Args:
        request: Request descriptor instance

    Returns:
        List of (wire_name, value) tuples in declaration order

    Example:
        >>> encode(GetPrices(identifier="AAPL"))
        [('identifier', 'AAPL')]

        >>> encode(SearchDataPoints(identifiers=["AAPL", "MSFT"], tags=["close_price"]))
        [('identifier', 'AAPL,MSFT'), ('item', 'close_price')]
    """
    pairs: Params = []

    for name, field_info in type(request).model_fields.items():
        value = getattr(request, name)
        if value is None:
            continue

        key = field_info.alias or name

        if isinstance(value, (list, tuple)):
            if not value:
                continue
            tokens = [format_scalar(item) for item in value]
            if _is_repeated(field_info):
                pairs.extend((key, token) for token in tokens)
            else:
                pairs.append((key, LIST_DELIMITER.join(tokens)))
            continue

        pairs.append((key, format_scalar(value)))

    return pairs


def to_query_string(pairs: Params) -> str:
    """
    Render encoded pairs as a URL query string (without the leading "?").

    Example:
        >>> to_query_string([("identifier", "AAPL")])
        'identifier=AAPL'
    """
    return urlencode(pairs)
