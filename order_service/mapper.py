from datetime import datetime, timezone
from typing import List, NamedTuple

from . import models, schemas
from .errors import ValidationError
from .timestamps import format_rfc3339, parse_rfc3339


class OrderReplacement(NamedTuple):
    """Field values and detached items that replace an existing order's content"""
    ordered_at: datetime
    customer_name: str
    items: List[models.Item]


def _parse_ordered_at(value: str):
    try:
        ordered_at = parse_rfc3339(value)
    except ValueError as e:
        raise ValidationError(str(e))
    # Stored in UTC so backends without zone support round-trip the same instant
    return ordered_at.astimezone(timezone.utc)


def order_from_create(request: schemas.OrderCreate) -> models.Order:
    """Build an unsaved Order without items.

    Items are attached by the repository once the order has an id.
    """
    return models.Order(
        ordered_at=_parse_ordered_at(request.ordered_at),
        customer_name=request.customer_name,
    )


def items_from_create(request: schemas.OrderCreate, order_id: int) -> List[models.Item]:
    return [
        models.Item(
            item_code=item.item_code,
            description=item.description,
            quantity=item.quantity,
            order_id=order_id,
        )
        for item in request.items
    ]


def replacement_from_update(request: schemas.OrderUpdate, order_id: int) -> OrderReplacement:
    """Build the replacement content for an existing order id.

    Items are tagged with the order id but left unattached to any Order
    instance; the repository moves them onto the stored order.
    """
    return OrderReplacement(
        ordered_at=_parse_ordered_at(request.ordered_at),
        customer_name=request.customer_name,
        items=[
            models.Item(
                item_code=item.item_code,
                description=item.description,
                quantity=item.quantity,
                line_item_id=item.line_item_id,
                order_id=order_id,
            )
            for item in request.items
        ],
    )


def item_to_response(item: models.Item) -> schemas.OrderItemResponse:
    return schemas.OrderItemResponse(
        item_code=item.item_code,
        description=item.description or "",
        quantity=item.quantity,
        # Zero means "not supplied" and is left out of the response
        line_item_id=item.line_item_id or None,
    )


def order_to_response(order: models.Order, include_updated_at: bool = False) -> schemas.OrderResponse:
    """Serialize an Order and its items to the response shape"""
    response = schemas.OrderResponse(
        ordered_at=format_rfc3339(order.ordered_at),
        customer_name=order.customer_name,
        order_id=order.id,
        items=[item_to_response(item) for item in order.items],
    )
    if include_updated_at and order.updated_at is not None:
        response.updated_at = format_rfc3339(order.updated_at)
    return response
