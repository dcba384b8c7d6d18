"""Application service for Order operations."""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos.identity import CustomerIdentity
from storefront.application.dtos.order_dto import (
    AdminCreateOrderRequest,
    CheckoutRequest,
    CustomerDTO,
    OrderDTO,
    OrderItemDTO,
    OrderItemInput,
    OrderListDTO,
    OrderStatsDTO,
    PaginationDTO,
    ShippingAddressDTO,
    ShippingAddressInput,
)
from storefront.data.uow import create_uow
from storefront.domain.entities.order import Order, OrderItem, ShippingAddress
from storefront.domain.enums import OrderStatus
from storefront.domain.exceptions import OrderNotFoundError, OrderPersistenceError
from storefront.domain.repositories.order_repository import OrderQuery
from storefront.settings.sections import OrderSettings


logger = logging.getLogger(__name__)


DEFAULT_CUSTOMER_NAME = "Customer"


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Turn validated requests into Order aggregates
    - Run every write inside one Unit of Work (all or nothing)
    - Translate database failures into OrderPersistenceError
    - Transform domain entities into response DTOs
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        settings: Optional[OrderSettings] = None,
    ) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
            settings: Order behaviour settings
        """
        self._session_factory = session_factory
        self._settings = settings or OrderSettings()

    # =========================================================================
    # CREATION
    # =========================================================================

    async def checkout(self, identity: CustomerIdentity, request: CheckoutRequest) -> OrderDTO:
        """Place an order for the authenticated customer.

        Args:
            identity: Caller from the identity provider
            request: Validated checkout body

        Returns:
            OrderDTO of the persisted order

        Raises:
            OrderValidationError: If the aggregate rejects the data
            OrderPersistenceError: If the transaction fails (nothing is kept)
        """
        customer_info = request.customer_info
        customer_name = (
            (customer_info.name if customer_info else None)
            or identity.name
            or DEFAULT_CUSTOMER_NAME
        )
        customer_email = (
            (customer_info.email if customer_info else None)
            or identity.email
            or ""
        )

        items = self._items_from_input(request.items)
        order = Order.place(
            customer_id=identity.user_id,
            customer_name=customer_name,
            customer_email=customer_email,
            items=items,
            shipping_address=self._address_from_input(request.shipping_address),
            total=request.total if self._settings.trust_client_total else None,
        )

        if order.has_total_mismatch():
            logger.warning(
                f"Checkout total {order.total} for customer {identity.user_id} "
                f"differs from item sum {order.calculate_items_total()}"
            )

        persisted = await self._persist_new_order(order)
        logger.info(
            f"Order {persisted.id} placed by customer {identity.user_id} "
            f"({len(persisted.items)} items, total={persisted.total})"
        )
        return self._order_to_dto(persisted)

    async def create_order(self, request: AdminCreateOrderRequest) -> OrderDTO:
        """Create an order on behalf of a customer; total is computed from items."""
        order = Order.place(
            customer_id=request.customer_id,
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            items=self._items_from_input(request.items),
            shipping_address=self._address_from_input(request.shipping_address),
            status=request.status,
        )

        persisted = await self._persist_new_order(order)
        logger.info(f"Order {persisted.id} created by admin for customer {persisted.customer_id}")
        return self._order_to_dto(persisted)

    # =========================================================================
    # READS
    # =========================================================================

    async def get_order(self, order_id: str) -> OrderDTO:
        """Get order by ID.

        Raises:
            OrderNotFoundError: If no such order exists
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)

        if order is None:
            raise OrderNotFoundError(order_id)
        return self._order_to_dto(order)

    async def list_orders(self, query: OrderQuery) -> OrderListDTO:
        """List orders with filters, sorting and pagination."""
        if query.limit > self._settings.max_page_size:
            raise ValueError(f"limit must not exceed {self._settings.max_page_size}")

        uow = create_uow(self._session_factory)
        async with uow:
            page = await uow.orders.find_page(query)

        return OrderListDTO(
            orders=[self._order_to_dto(order) for order in page.orders],
            pagination=PaginationDTO.build(total=page.total, page=query.page, limit=query.limit),
        )

    async def list_customer_orders(
        self,
        customer_id: str,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> OrderListDTO:
        """The caller's own orders, newest first."""
        return await self.list_orders(
            OrderQuery(
                customer_id=customer_id,
                status=status,
                page=page,
                limit=limit or self._settings.default_page_size,
            )
        )

    async def get_stats(
        self,
        customer_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> OrderStatsDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            stats = await uow.orders.stats(customer_id=customer_id, date_from=date_from, date_to=date_to)

        return OrderStatsDTO(
            total=stats.total,
            pending=stats.by_status.get(OrderStatus.PENDING, 0),
            shipped=stats.by_status.get(OrderStatus.SHIPPED, 0),
            delivered=stats.by_status.get(OrderStatus.DELIVERED, 0),
            cancelled=stats.by_status.get(OrderStatus.CANCELLED, 0),
            revenue=stats.revenue,
        )

    async def get_recent(self, limit: int = 5) -> List[OrderDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_recent(limit=limit)
        return [self._order_to_dto(order) for order in orders]

    # =========================================================================
    # STATUS LIFECYCLE
    # =========================================================================

    async def update_status(self, order_id: str, status: OrderStatus) -> OrderDTO:
        """Move an order to ``status``.

        Raises:
            OrderNotFoundError: If no such order exists
            InvalidStatusTransitionError: If the lifecycle forbids the change
        """
        return await self._transition(order_id, OrderStatus(status))

    async def cancel_order(self, order_id: str) -> OrderDTO:
        """Cancel an order; its items and shipping address are kept."""
        return await self._transition(order_id, OrderStatus.CANCELLED)

    async def delete_order(self, order_id: str) -> None:
        """Hard delete an order together with its items and address.

        Raises:
            OrderNotFoundError: If no such order exists
        """
        uow = create_uow(self._session_factory)
        try:
            async with uow:
                deleted = await uow.orders.delete(order_id)
                if not deleted:
                    raise OrderNotFoundError(order_id)
                await uow.commit()
        except SQLAlchemyError as e:
            logger.error(f"[{uow.execution_id}] Failed to delete order {order_id}: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to delete order", cause=e) from e

        logger.info(f"[{uow.execution_id}] Order {order_id} deleted")

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    async def _persist_new_order(self, order: Order) -> Order:
        uow = create_uow(self._session_factory)
        try:
            async with uow:
                persisted = await uow.orders.add(order)
                await uow.commit()
        except SQLAlchemyError as e:
            logger.error(f"[{uow.execution_id}] Failed to create order: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to create order", cause=e) from e
        return persisted

    async def _transition(self, order_id: str, status: OrderStatus) -> OrderDTO:
        uow = create_uow(self._session_factory)
        try:
            async with uow:
                order = await uow.orders.find_by_id(order_id)
                if order is None:
                    raise OrderNotFoundError(order_id)

                previous = order.change_status(
                    status, enforce=self._settings.enforce_status_transitions
                )
                if previous != order.status:
                    await uow.orders.update_status(order)
                    await uow.commit()
                    logger.info(
                        f"[{uow.execution_id}] Order {order_id} status "
                        f"{previous.value} -> {order.status.value}"
                    )

                order = await uow.orders.find_by_id(order_id)
        except SQLAlchemyError as e:
            logger.error(f"[{uow.execution_id}] Failed to update order {order_id}: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to update order", cause=e) from e

        return self._order_to_dto(order)

    def _items_from_input(self, items: Sequence[OrderItemInput]) -> List[OrderItem]:
        return [
            OrderItem(
                product_id=item.product_id,
                product_title=item.product_title,
                quantity=item.quantity,
                price=item.price,
                image=item.image,
            )
            for item in items
        ]

    def _address_from_input(self, address: ShippingAddressInput) -> ShippingAddress:
        return ShippingAddress(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country or self._settings.default_country,
        )

    def _order_to_dto(self, order: Order) -> OrderDTO:
        """Transform Order domain entity to OrderDTO."""
        address = order.shipping_address
        return OrderDTO(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer=CustomerDTO(
                id=order.customer_id,
                name=order.customer_name,
                email=order.customer_email,
            ),
            total=order.total,
            status=order.status,
            shipping_address_id=order.shipping_address_id,
            shipping_address=ShippingAddressDTO(
                id=address.id,
                order_id=address.order_id,
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            items=[
                OrderItemDTO(
                    id=item.id,
                    product_id=item.product_id,
                    product_title=item.product_title,
                    quantity=item.quantity,
                    price=item.price,
                    image=item.image,
                )
                for item in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
