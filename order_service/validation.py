"""Classify request problems into the service's error taxonomy.

Field rules live on the request schemas and run in declaration order, so
the first error reported is the first violated rule: orderedAt,
customerName, the item list, then every item.
"""
from typing import Any, Dict, Sequence

from .errors import BadRequestError, NotFoundError, OrderServiceError, ValidationError

# Longer digit strings cannot name a stored order
MAX_ORDER_ID_DIGITS = 19


def error_from_body_errors(errors: Sequence[Dict[str, Any]]) -> OrderServiceError:
    """Classify FastAPI body validation errors.

    Unparsable JSON, a missing body or a body that is not an object is a
    bad request; anything wrong inside the object is a validation error
    carrying the first violated rule's message.
    """
    first = errors[0] if errors else None
    if first is None or first["type"] == "json_invalid":
        return BadRequestError("invalid json format")

    loc = tuple(first.get("loc", ()))
    if loc[:1] != ("body",):
        return BadRequestError("invalid request")
    if len(loc) == 1:
        return BadRequestError("invalid json format")
    return ValidationError(first["msg"])


def parse_order_id(raw: str) -> int:
    """Parse an orderID path segment, which must be a positive integer"""
    if not (raw.isascii() and raw.isdigit()):
        raise BadRequestError("invalid order id")
    if len(raw.lstrip("0")) > MAX_ORDER_ID_DIGITS:
        raise NotFoundError(f"order {raw} not found")
    order_id = int(raw)
    if order_id < 1:
        raise BadRequestError("invalid order id")
    return order_id
