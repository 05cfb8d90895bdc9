import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from . import mapper, models, schemas
from .errors import InternalServerError, NotFoundError

logger = logging.getLogger(__name__)

# Largest value an Integer primary key holds on every supported backend
MAX_ORDER_ID = 2**31 - 1


class OrderRepository:
    """Reads and writes orders with their items through one session.

    Every write commits once; a failure anywhere in the write rolls back
    the whole unit and surfaces as InternalServerError.
    """

    def __init__(self, db: Session):
        self.db = db

    def _live_orders(self):
        return (
            self.db.query(models.Order)
            .options(selectinload(models.Order.items))
            .filter(models.Order.deleted_at.is_(None))
        )

    def list_orders(self) -> Tuple[List[models.Order], int]:
        orders = self._live_orders().order_by(models.Order.id).all()
        return orders, len(orders)

    def find_order(self, order_id: int) -> Optional[models.Order]:
        if not 0 < order_id <= MAX_ORDER_ID:
            return None
        return self._live_orders().filter(models.Order.id == order_id).first()

    def get_order(self, order_id: int) -> models.Order:
        order = self.find_order(order_id)
        if order is None:
            logger.warning(f"Order with ID {order_id} not found")
            raise NotFoundError(f"order {order_id} not found")
        return order

    def create_order(self, request: schemas.OrderCreate) -> models.Order:
        """Insert an order, then its items keyed by the new order id"""
        db_order = mapper.order_from_create(request)
        try:
            self.db.add(db_order)
            # Flush to obtain the order id for the items
            self.db.flush()
            db_order.items.extend(mapper.items_from_create(request, db_order.id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create order: {e}")
            raise InternalServerError("failed to create order")

        self.db.refresh(db_order)
        return db_order

    def update_order(self, order_id: int, request: schemas.OrderUpdate) -> models.Order:
        """Replace an order's fields and its whole item set"""
        db_order = self.get_order(order_id)
        replacement = mapper.replacement_from_update(request, order_id)

        try:
            # Orphaned items are deleted on flush
            db_order.items.clear()
            self.db.flush()

            db_order.ordered_at = replacement.ordered_at
            db_order.customer_name = replacement.customer_name
            db_order.updated_at = datetime.now(timezone.utc)
            db_order.items.extend(replacement.items)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update order {order_id}: {e}")
            raise InternalServerError(f"failed to update order {order_id}")

        self.db.refresh(db_order)
        return db_order

    def delete_order(self, order_id: int) -> int:
        """Soft delete an order together with its items"""
        db_order = self.get_order(order_id)
        now = datetime.now(timezone.utc)

        try:
            db_order.deleted_at = now
            for item in db_order.items:
                item.deleted_at = now
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete order {order_id}: {e}")
            raise InternalServerError(f"failed to delete order {order_id}")

        return order_id
