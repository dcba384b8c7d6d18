"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal

from storefront.domain.entities.order import Order, OrderItem, ShippingAddress
from storefront.domain.enums import OrderStatus

from .models.order_model import OrderItemModel, OrderModel, ShippingAddressModel


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        return OrderItem(
            id=model.id,
            product_id=model.product_id,
            product_title=model.product_title,
            quantity=model.quantity,
            price=Decimal(str(model.price)),
            image=model.image,
        )

    @staticmethod
    def to_persistence(entity: OrderItem, order_id: str, position: int) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderItem snapshot
            order_id: Owning order id
            position: Index of the item in the submitted list

        Returns:
            OrderItemModel instance
        """
        return OrderItemModel(
            order_id=order_id,
            product_id=entity.product_id,
            product_title=entity.product_title,
            quantity=entity.quantity,
            price=entity.price,
            image=entity.image,
            position=position,
        )


class ShippingAddressMapper:
    """Static mapper for ShippingAddress ↔ ShippingAddressModel transformation."""

    @staticmethod
    def to_domain(model: ShippingAddressModel) -> ShippingAddress:
        return ShippingAddress(
            id=model.id,
            order_id=model.order_id,
            street=model.street,
            city=model.city,
            state=model.state,
            zip_code=model.zip_code,
            country=model.country,
        )

    @staticmethod
    def to_persistence(entity: ShippingAddress, order_id: str) -> ShippingAddressModel:
        return ShippingAddressModel(
            order_id=order_id,
            street=entity.street,
            city=entity.city,
            state=entity.state,
            zip_code=entity.zip_code,
            country=entity.country,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested rows."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate.

        ``items`` and ``shipping_address`` must already be loaded.

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        if model.shipping_address is None:
            raise ValueError(f"Order {model.id} has no shipping address")

        return Order(
            id=model.id,
            customer_id=model.customer_id,
            customer_name=model.customer_name,
            customer_email=model.customer_email,
            total=Decimal(str(model.total)),
            status=OrderStatus(model.status),
            shipping_address_id=model.shipping_address_id,
            shipping_address=ShippingAddressMapper.to_domain(model.shipping_address),
            items=[OrderItemMapper.to_domain(item) for item in model.items],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert the order header to an ORM model.

        The address link starts empty; the repository fills it in once the
        address row exists. Relationships start out empty so attaching rows
        later never triggers a lazy load.
        """
        model = OrderModel(
            customer_id=entity.customer_id,
            customer_name=entity.customer_name,
            customer_email=entity.customer_email,
            total=entity.total,
            status=entity.status.value,
            shipping_address_id=None,
            shipping_address=None,
            items=[],
        )
        if entity.id:
            model.id = entity.id
        return model
