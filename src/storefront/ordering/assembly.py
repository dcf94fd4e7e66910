"""Order Query/Assembly — response projections of stored orders.

Orders are reloaded with their user and products before projection. An
order whose reload comes back empty is left out of the batch; a batch that
had to produce at least one order and produced none is an error rather than
an empty success.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from storefront.errors import OrderAssemblyError
from storefront.utils.logging import get_logger

from .repository import OrderDetails

logger = get_logger(__name__)


def format_timestamp(value: datetime | None) -> str | None:
    """RFC 3339 text for a stored timestamp; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat(timespec="seconds")


@dataclass(frozen=True)
class OrderItemView:
    product_id: str
    product_name: str | None
    quantity: int
    unit_price: float
    total_price: float


@dataclass(frozen=True)
class OrderView:
    order_id: str
    user_id: str
    user_name: str | None
    total_price: float
    status: str
    created_at: str | None
    items: tuple[OrderItemView, ...] = ()


def project(details: OrderDetails) -> OrderView:
    order = details.order
    items = tuple(
        OrderItemView(
            product_id=str(item.product_id),
            product_name=(
                details.products[str(item.product_id)].name if str(item.product_id) in details.products else None
            ),
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
        )
        for item in order.items
    )
    return OrderView(
        order_id=str(order.id),
        user_id=str(order.user_id),
        user_name=details.user.name if details.user is not None else None,
        total_price=order.total_price,
        status=order.status,
        created_at=format_timestamp(order.created_at),
        items=items,
    )


class OrderAssembler:
    def __init__(self, orders) -> None:
        self._orders = orders

    def assemble(self, order_ids, require_any: bool = False) -> list[OrderView]:
        views = []
        for order_id in order_ids:
            details = self._orders.load_with_details(order_id)
            if details is None:
                logger.warning("order_detail_missing", order_id=str(order_id))
                continue
            views.append(project(details))

        if require_any and not views:
            raise OrderAssemblyError(
                "No order could be assembled",
                order_ids=[str(order_id) for order_id in order_ids],
            )
        return views

    def assemble_one(self, order_id) -> OrderView:
        """Project a single order that must exist, e.g. one that was just placed."""
        return self.assemble([order_id], require_any=True)[0]

    def for_user(self, user_id) -> list[OrderView]:
        """Projections of all of a user's orders, oldest first."""
        return self.assemble([order.id for order in self._orders.list_by_user(user_id)])
