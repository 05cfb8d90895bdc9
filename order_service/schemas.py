import re
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from .timestamps import parse_rfc3339

ALPHA_PATTERN = re.compile(r"^[A-Za-z]+$")
ALPHANUMERIC_PATTERN = re.compile(r"^[A-Za-z0-9]+$")
MIN_QUANTITY = 1
MAX_QUANTITY = 999


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


class OrderItemCreate(BaseModel):
    """Schema for an order item in a create request"""
    item_code: Optional[str] = Field(None, alias="itemCode", validate_default=True)
    description: Optional[str] = Field("", alias="description")
    quantity: Optional[int] = Field(None, alias="quantity", validate_default=True)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("item_code", mode="before")
    @classmethod
    def item_code_must_be_alphanumeric(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "itemCode is required")
        if not isinstance(v, str) or not ALPHANUMERIC_PATTERN.match(v):
            raise PydanticCustomError("alphanum", "itemCode must alphanumeric")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_must_be_text(cls, v):
        if v is None:
            return ""
        if not isinstance(v, str):
            raise PydanticCustomError("string_type", "description must be a string")
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_must_be_in_range(cls, v):
        # Zero counts as missing, like an unset unsigned field
        if v is None or (_is_int(v) and v == 0):
            raise PydanticCustomError("required", "quantity is required")
        if not _is_int(v):
            raise PydanticCustomError("int_type", "quantity must be an integer")
        if not MIN_QUANTITY <= v <= MAX_QUANTITY:
            raise PydanticCustomError(
                "range",
                "item quantity must between {min} to {max}",
                {"min": MIN_QUANTITY, "max": MAX_QUANTITY},
            )
        return v


class OrderItemUpdate(OrderItemCreate):
    """Schema for an order item in an update request"""
    line_item_id: Optional[int] = Field(None, alias="lineItemID")

    @field_validator("line_item_id", mode="before")
    @classmethod
    def line_item_id_must_be_integer(cls, v):
        if v is not None and not _is_int(v):
            raise PydanticCustomError("int_type", "lineItemID must be an integer")
        return v


class OrderBase(BaseModel):
    """Base schema for order requests"""
    ordered_at: Optional[str] = Field(None, alias="orderedAt", validate_default=True)
    customer_name: Optional[str] = Field(None, alias="customerName", validate_default=True)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("ordered_at", mode="before")
    @classmethod
    def ordered_at_must_be_rfc3339(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "orderedAt is required")
        if not isinstance(v, str):
            raise PydanticCustomError("rfc3339", "unknown time format")
        try:
            parse_rfc3339(v)
        except ValueError:
            raise PydanticCustomError("rfc3339", "unknown time format")
        return v

    @field_validator("customer_name", mode="before")
    @classmethod
    def customer_name_must_be_alpha(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "customerName is required")
        if not isinstance(v, str) or not ALPHA_PATTERN.match(v):
            raise PydanticCustomError("alpha", "name should not contain numeric and symbol")
        return v


def _check_items(v):
    if v is None:
        raise PydanticCustomError("items_empty", "items is empty")
    if not isinstance(v, list):
        raise PydanticCustomError("list_type", "items must be a list")
    if len(v) < 1:
        raise PydanticCustomError("items_empty", "items is empty")
    return v


class OrderCreate(OrderBase):
    """Schema for creating an order"""
    items: List[OrderItemCreate] = Field(None, validate_default=True)

    @field_validator("items", mode="before")
    @classmethod
    def items_must_not_be_empty(cls, v):
        return _check_items(v)


class OrderUpdate(OrderBase):
    """Schema for replacing an order and its items"""
    items: List[OrderItemUpdate] = Field(None, validate_default=True)

    @field_validator("items", mode="before")
    @classmethod
    def items_must_not_be_empty(cls, v):
        return _check_items(v)


class OrderItemResponse(BaseModel):
    """Schema for reading an order item"""
    item_code: str = Field(..., alias="itemCode")
    description: str = ""
    quantity: int
    line_item_id: Optional[int] = Field(None, alias="lineItemID")

    model_config = ConfigDict(populate_by_name=True)


class OrderResponse(BaseModel):
    """Schema for reading an order"""
    ordered_at: str = Field(..., alias="orderedAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")
    customer_name: str = Field(..., alias="customerName")
    order_id: int = Field(..., alias="orderID")
    items: List[OrderItemResponse] = []

    model_config = ConfigDict(populate_by_name=True)


class OrderListResponse(BaseModel):
    orders: List[OrderResponse]
    count: int


class OrderIdResponse(BaseModel):
    """Acknowledgement carrying the id of a created or deleted order"""
    success: bool = True
    order_id: int


class ErrorResponse(BaseModel):
    message: str
    code: str
