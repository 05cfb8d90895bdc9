from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .database import Base

class Order(Base):
    """Order database model"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    ordered_at = Column(DateTime(timezone=True), nullable=False)
    customer_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # Soft delete marker, NULL for live rows
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationship with Item
    items = relationship(
        "Item",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Item.id",
    )

class Item(Base):
    """Order line item database model"""
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    item_code = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    quantity = Column(Integer, nullable=False)
    line_item_id = Column(Integer, nullable=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationship with Order
    order = relationship("Order", back_populates="items")
