"""SQLAlchemy ORM models for Order aggregate."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import relationship

from storefront.domain.enums import OrderStatus

from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=_new_id)

    # Customer snapshot at order time
    customer_id = Column(String(255), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, default="")

    total = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)

    # Linked after the address row exists; NULL only inside the creating transaction
    shipping_address_id = Column(
        String(36),
        ForeignKey(
            "shipping_addresses.id",
            use_alter=True,
            name="fk_orders_shipping_address_id",
            ondelete="SET NULL",
        ),
        nullable=True,
        unique=True,
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
    shipping_address = relationship(
        "ShippingAddressModel",
        back_populates="order",
        uselist=False,
        cascade="all, delete-orphan",
        foreign_keys="ShippingAddressModel.order_id",
    )

    __table_args__ = (
        Index("ix_orders_customer_created", "customer_id", "created_at"),
        Index("ix_orders_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<OrderModel(id={self.id}, customer_id={self.customer_id}, status={self.status})>"


class ShippingAddressModel(Base):
    """SQLAlchemy ORM model for shipping_addresses table."""

    __tablename__ = "shipping_addresses"

    id = Column(String(36), primary_key=True, default=_new_id)
    order_id = Column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    street = Column(String(500), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(255), nullable=False, default="")
    zip_code = Column(String(50), nullable=False, default="")
    country = Column(String(255), nullable=False)

    order = relationship(
        "OrderModel",
        back_populates="shipping_address",
        foreign_keys=[order_id],
    )

    def __repr__(self):
        return f"<ShippingAddressModel(id={self.id}, order_id={self.order_id}, city={self.city})>"


class OrderItemModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=_new_id)
    order_id = Column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Reference only: the catalog product may change or disappear later
    product_id = Column(String(255), nullable=False, index=True)
    product_title = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String(1000), nullable=False)

    # Preserves the submitted line order
    position = Column(Integer, nullable=False, default=0)

    order = relationship("OrderModel", back_populates="items")

    def __repr__(self):
        return f"<OrderItemModel(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
