"""SQLAlchemy implementation of OrderRepository."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.domain.entities.order import Order
from storefront.domain.enums import OrderStatus
from storefront.domain.value_objects import to_money
from storefront.domain.repositories.order_repository import (
    OrderPage,
    OrderQuery,
    OrderRepository,
    OrderStats,
)

from ..mappers import OrderItemMapper, OrderMapper, ShippingAddressMapper
from ..models.order_model import OrderModel, utcnow


logger = logging.getLogger(__name__)


_SORT_COLUMNS = {
    "createdAt": OrderModel.created_at,
    "total": OrderModel.total,
    "status": OrderModel.status,
}


def _with_relations(statement: Select) -> Select:
    """Eager-load items and shipping address, overwriting stale identity-map state."""
    return statement.options(
        selectinload(OrderModel.items),
        selectinload(OrderModel.shipping_address),
    ).execution_options(populate_existing=True)


def _filters(
    customer_id: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    search: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> list:
    conditions = []
    if customer_id:
        conditions.append(OrderModel.customer_id == customer_id)
    if status:
        conditions.append(OrderModel.status == OrderStatus(status).value)
    if search:
        conditions.append(
            or_(
                OrderModel.id.icontains(search, autoescape=True),
                OrderModel.customer_name.icontains(search, autoescape=True),
                OrderModel.customer_email.icontains(search, autoescape=True),
            )
        )
    if date_from:
        conditions.append(OrderModel.created_at >= date_from)
    if date_to:
        conditions.append(OrderModel.created_at <= date_to)
    return conditions


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> Order:
        """Insert order, address and items inside the current transaction.

        Rows are written in dependency order so no placeholder foreign key
        is ever stored:

        1. order header with an empty address link
        2. shipping address pointing at the order
        3. order linked back to the address
        4. item snapshots

        Nothing is committed here; the Unit of Work owns the transaction.
        """
        order_model = OrderMapper.to_persistence(order)
        self._session.add(order_model)
        await self._session.flush()

        address_model = ShippingAddressMapper.to_persistence(order.shipping_address, order_model.id)
        order_model.shipping_address = address_model
        await self._session.flush()

        await self._link_shipping_address(order_model, address_model.id)

        await self._add_items(order, order_model)

        persisted = await self.find_by_id(order_model.id)
        if persisted is None:
            raise RuntimeError(f"Order {order_model.id} vanished inside its own transaction")

        logger.info(f"Inserted order {persisted.id} with {len(persisted.items)} item(s)")
        return persisted

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Returns:
            Order if found, None otherwise
        """
        result = await self._session.execute(
            _with_relations(select(OrderModel).where(OrderModel.id == order_id))
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_page(self, query: OrderQuery) -> OrderPage:
        """List orders matching the query with total count."""
        conditions = _filters(
            customer_id=query.customer_id,
            status=query.status,
            search=query.search,
            date_from=query.date_from,
            date_to=query.date_to,
        )

        count_result = await self._session.execute(
            select(func.count()).select_from(OrderModel).where(*conditions)
        )
        total = count_result.scalar_one()

        sort_column = _SORT_COLUMNS[query.sort_by]
        if query.sort_order == "asc":
            ordering = (sort_column.asc(), OrderModel.id.asc())
        else:
            ordering = (sort_column.desc(), OrderModel.id.desc())

        result = await self._session.execute(
            _with_relations(
                select(OrderModel)
                .where(*conditions)
                .order_by(*ordering)
                .offset(query.offset)
                .limit(query.limit)
            )
        )
        models = result.scalars().all()

        return OrderPage(
            orders=[OrderMapper.to_domain(model) for model in models],
            total=total,
        )

    async def update_status(self, order: Order) -> None:
        model = await self._session.get(OrderModel, order.id)
        if model is None:
            raise LookupError(f"Order {order.id} not found")

        model.status = order.status.value
        model.updated_at = utcnow()
        await self._session.flush()

    async def delete(self, order_id: str) -> bool:
        """Hard delete the order; items and address go with it."""
        model = await self._session.get(OrderModel, order_id)
        if model is None:
            return False

        # Drop the order -> address link first so the address row can go
        # before the order row on databases that enforce foreign keys.
        model.shipping_address_id = None
        await self._session.flush()

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def stats(
        self,
        customer_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> OrderStats:
        conditions = _filters(customer_id=customer_id, date_from=date_from, date_to=date_to)

        result = await self._session.execute(
            select(OrderModel.status, func.count())
            .where(*conditions)
            .group_by(OrderModel.status)
        )
        by_status = {status: 0 for status in OrderStatus}
        for status_value, count in result.all():
            by_status[OrderStatus(status_value)] = count

        revenue_result = await self._session.execute(
            select(func.coalesce(func.sum(OrderModel.total), 0)).where(
                *conditions,
                OrderModel.status != OrderStatus.CANCELLED.value,
            )
        )
        revenue = to_money(revenue_result.scalar_one())

        return OrderStats(
            total=sum(by_status.values()),
            by_status=by_status,
            revenue=revenue,
        )

    async def find_recent(self, limit: int = 5) -> List[Order]:
        result = await self._session.execute(
            _with_relations(
                select(OrderModel)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
                .limit(limit)
            )
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    async def _link_shipping_address(self, order_model: OrderModel, address_id: str) -> None:
        order_model.shipping_address_id = address_id
        await self._session.flush()

    async def _add_items(self, order: Order, order_model: OrderModel) -> None:
        order_model.items.extend(
            OrderItemMapper.to_persistence(item, order_model.id, position)
            for position, item in enumerate(order.items)
        )
        await self._session.flush()
