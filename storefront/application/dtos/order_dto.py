"""Application DTOs for Order operations.

Request bodies are parsed into these models once at the HTTP boundary;
everything after that works with typed fields and resolved defaults.
Keys are camelCase on the wire and snake_case in Python.
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from storefront.domain.enums import OrderStatus


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# REQUESTS
# =============================================================================

class OrderItemInput(CamelModel):
    """One cart line as submitted at checkout."""

    product_id: str = Field(..., min_length=1, description="Catalog product id")
    product_title: str = Field(..., min_length=1, description="Title snapshot")
    quantity: int = Field(..., ge=1, description="Quantity ordered")
    price: Decimal = Field(..., gt=0, description="Unit price snapshot")
    image: str = Field(..., min_length=1, description="Image URL snapshot")


class ShippingAddressInput(CamelModel):
    """Delivery address; the street may arrive as ``address`` or ``street``."""

    street: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("address", "street"),
        description="Street line",
    )
    city: str = Field(..., min_length=1)
    state: str = ""
    zip_code: str = ""
    country: Optional[str] = Field(default=None, description="Defaults to the configured country")

    @field_validator("state", "zip_code", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("country")
    @classmethod
    def _blank_country_is_default(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class CustomerInfo(CamelModel):
    """Optional overrides for the customer snapshot."""

    name: Optional[str] = None
    email: Optional[str] = None


class CheckoutRequest(CamelModel):
    """Body of ``POST /api/orders``."""

    items: List[OrderItemInput] = Field(default_factory=list)
    total: Optional[Decimal] = None
    shipping_address: Optional[ShippingAddressInput] = None
    customer_info: Optional[CustomerInfo] = None

    @model_validator(mode="after")
    def _check_required(self) -> "CheckoutRequest":
        if not self.items:
            raise PydanticCustomError("items_required", "Order items are required")
        if self.total is None or self.total <= 0:
            raise PydanticCustomError("total_invalid", "Valid order total is required")
        if self.shipping_address is None:
            raise PydanticCustomError("address_required", "Complete shipping address is required")
        return self


class AdminCreateOrderRequest(CamelModel):
    """Body of ``POST /api/admin/orders``; the total is always computed."""

    customer_id: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    customer_email: str = Field(..., min_length=1)
    items: List[OrderItemInput] = Field(default_factory=list)
    shipping_address: ShippingAddressInput
    status: OrderStatus = OrderStatus.PENDING

    @model_validator(mode="after")
    def _check_items(self) -> "AdminCreateOrderRequest":
        if not self.items:
            raise PydanticCustomError("items_required", "Order items are required")
        return self


class UpdateOrderStatusRequest(CamelModel):
    """Body of ``PUT /api/admin/orders/{id}``."""

    status: OrderStatus


# =============================================================================
# RESPONSES
# =============================================================================

class OrderItemDTO(CamelModel):
    """DTO for order item."""

    id: Optional[str] = None
    product_id: str
    product_title: str
    quantity: int
    price: Decimal
    image: str


class ShippingAddressDTO(CamelModel):
    id: Optional[str] = None
    order_id: Optional[str] = None
    street: str
    city: str
    state: str
    zip_code: str
    country: str


class CustomerDTO(CamelModel):
    id: str
    name: str
    email: str


class OrderDTO(CamelModel):
    """Response DTO for order details."""

    id: str
    customer_id: str
    customer_name: str
    customer_email: str
    customer: CustomerDTO
    total: Decimal
    status: OrderStatus
    shipping_address_id: Optional[str] = None
    shipping_address: ShippingAddressDTO
    items: List[OrderItemDTO] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderSummaryDTO(CamelModel):
    """Short form returned to the customer after checkout."""

    id: str
    total: Decimal
    status: OrderStatus
    created_at: Optional[datetime] = None


class CheckoutResponse(CamelModel):
    success: bool = True
    order: OrderSummaryDTO


class PaginationDTO(CamelModel):
    total: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationDTO":
        return cls(
            total=total,
            pages=math.ceil(total / limit),
            current_page=page,
            limit=limit,
            has_next=page * limit < total,
            has_prev=page > 1,
        )


class OrderListDTO(CamelModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list)
    pagination: PaginationDTO


class OrderStatsDTO(CamelModel):
    total: int
    pending: int
    shipped: int
    delivered: int
    cancelled: int
    revenue: Decimal


class OrderStatsEnvelope(CamelModel):
    success: bool = True
    data: OrderStatsDTO


class OrderEnvelope(CamelModel):
    success: bool = True
    data: OrderDTO


class RecentOrdersEnvelope(CamelModel):
    success: bool = True
    data: List[OrderDTO]


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
