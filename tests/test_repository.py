"""Tests for the order repository against a SQLite database."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from order_service import models
from order_service.errors import InternalServerError, NotFoundError
from order_service.repository import MAX_ORDER_ID, OrderRepository
from order_service.schemas import OrderCreate, OrderUpdate


@pytest.fixture
def repo(db_session):
    return OrderRepository(db_session)


class TestCreateAndList:
    def test_create_assigns_ids(self, repo, order_payload):
        order = repo.create_order(OrderCreate.model_validate(order_payload))

        assert order.id > 0
        assert [item.order_id for item in order.items] == [order.id, order.id]

    def test_list_includes_items(self, repo, order_payload):
        repo.create_order(OrderCreate.model_validate(order_payload))
        repo.create_order(OrderCreate.model_validate(order_payload))

        orders, count = repo.list_orders()

        assert count == 2
        assert [len(order.items) for order in orders] == [2, 2]

    def test_list_empty(self, repo):
        assert repo.list_orders() == ([], 0)

    def test_create_failure_rolls_back_order(self, repo, db_session, order_payload, monkeypatch):
        def failing_commit():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(db_session, "commit", failing_commit)

        with pytest.raises(InternalServerError):
            repo.create_order(OrderCreate.model_validate(order_payload))

        monkeypatch.undo()
        assert db_session.query(models.Order).count() == 0
        assert db_session.query(models.Item).count() == 0


class TestUpdate:
    def test_replaces_item_set(self, repo, db_session, order_payload):
        created = repo.create_order(OrderCreate.model_validate(order_payload))
        old_item_ids = [item.id for item in created.items]

        order_payload["customerName"] = "Jerry"
        order_payload["items"] = [{"itemCode": "Z9", "quantity": 5, "lineItemID": 11}]
        updated = repo.update_order(created.id, OrderUpdate.model_validate(order_payload))

        assert updated.customer_name == "Jerry"
        assert [(item.item_code, item.quantity, item.line_item_id) for item in updated.items] == [
            ("Z9", 5, 11)
        ]
        remaining = db_session.query(models.Item).filter(models.Item.id.in_(old_item_ids)).count()
        assert remaining == 0

    def test_repeated_updates_keep_one_order(self, repo, db_session, order_payload):
        created = repo.create_order(OrderCreate.model_validate(order_payload))

        for code in ("X1", "X2"):
            order_payload["items"] = [{"itemCode": code, "quantity": 1}]
            updated = repo.update_order(created.id, OrderUpdate.model_validate(order_payload))
            assert updated.id == created.id
            assert [item.item_code for item in updated.items] == [code]

        assert db_session.query(models.Order).count() == 1
        assert db_session.query(models.Item).count() == 1

    def test_id_beyond_column_range(self, repo, order_payload):
        with pytest.raises(NotFoundError):
            repo.update_order(MAX_ORDER_ID + 1, OrderUpdate.model_validate(order_payload))

    def test_missing_order(self, repo, order_payload):
        with pytest.raises(NotFoundError):
            repo.update_order(404, OrderUpdate.model_validate(order_payload))


class TestDelete:
    def test_soft_deletes_order_and_items(self, repo, db_session, order_payload):
        created = repo.create_order(OrderCreate.model_validate(order_payload))

        assert repo.delete_order(created.id) == created.id
        assert repo.find_order(created.id) is None
        assert repo.list_orders() == ([], 0)

        row = db_session.get(models.Order, created.id)
        assert row.deleted_at is not None
        assert all(item.deleted_at is not None for item in row.items)

    def test_missing_order(self, repo):
        with pytest.raises(NotFoundError):
            repo.delete_order(1)

    def test_deleted_order_cannot_be_updated(self, repo, order_payload):
        created = repo.create_order(OrderCreate.model_validate(order_payload))
        repo.delete_order(created.id)

        with pytest.raises(NotFoundError):
            repo.update_order(created.id, OrderUpdate.model_validate(order_payload))


class TestFind:
    def test_out_of_range_ids(self, repo):
        assert repo.find_order(0) is None
        assert repo.find_order(10**22) is None

    def test_delete_beyond_column_range(self, repo):
        with pytest.raises(NotFoundError):
            repo.delete_order(2**64)
