"""Tests for mapping between request schemas, models and responses."""

from datetime import datetime, timezone

from order_service import mapper, models
from order_service.schemas import OrderCreate, OrderResponse, OrderUpdate


class TestRequestMapping:
    def test_order_from_create(self, order_payload):
        order_payload["orderedAt"] = "2019-11-10T04:21:46+07:00"
        order = mapper.order_from_create(OrderCreate.model_validate(order_payload))

        assert order.id is None
        assert order.customer_name == "Tom"
        assert order.ordered_at == datetime(2019, 11, 9, 21, 21, 46, tzinfo=timezone.utc)
        assert order.items == []

    def test_items_from_create_use_order_id(self, order_payload):
        items = mapper.items_from_create(OrderCreate.model_validate(order_payload), 9)

        assert [(item.item_code, item.quantity, item.order_id) for item in items] == [
            ("123", 1, 9),
            ("A45", 2, 9),
        ]
        assert all(item.line_item_id is None for item in items)

    def test_replacement_from_update_tags_items(self, order_payload):
        order_payload["orderedAt"] = "2019-11-10T10:00:00Z"
        order_payload["items"][0]["lineItemID"] = 3
        replacement = mapper.replacement_from_update(OrderUpdate.model_validate(order_payload), 5)

        assert replacement.customer_name == "Tom"
        assert replacement.ordered_at == datetime(2019, 11, 10, 10, 0, 0, tzinfo=timezone.utc)
        assert [item.order_id for item in replacement.items] == [5, 5]
        assert [item.line_item_id for item in replacement.items] == [3, None]
        assert all(item.order is None for item in replacement.items)


class TestResponseMapping:
    def _order(self):
        order = models.Order(
            id=5,
            customer_name="Tom",
            ordered_at=datetime(2019, 11, 9, 21, 21, 46),
            updated_at=datetime(2019, 11, 10, 8, 0, 0),
        )
        order.items = [
            models.Item(item_code="123", description="IPhone 10X", quantity=1, line_item_id=0),
            models.Item(item_code="A45", description="Charger", quantity=2, line_item_id=4),
        ]
        return order

    def test_order_to_response(self):
        body = mapper.order_to_response(self._order()).model_dump(by_alias=True, exclude_none=True)

        assert body == {
            "orderedAt": "2019-11-09T21:21:46Z",
            "customerName": "Tom",
            "orderID": 5,
            "items": [
                {"itemCode": "123", "description": "IPhone 10X", "quantity": 1},
                {"itemCode": "A45", "description": "Charger", "quantity": 2, "lineItemID": 4},
            ],
        }

    def test_updated_at_only_when_requested(self):
        order = self._order()

        assert mapper.order_to_response(order).updated_at is None
        assert (
            mapper.order_to_response(order, include_updated_at=True).updated_at
            == "2019-11-10T08:00:00Z"
        )


class TestSchemaConfig:
    def test_response_fields_populate_by_name(self):
        response = OrderResponse(ordered_at="2019-11-09T21:21:46Z", customer_name="Tom", order_id=1)

        assert OrderResponse.model_config["populate_by_name"] is True
        assert response.model_dump(by_alias=True)["orderID"] == 1
