"""Order Builder — turns a user's line requests into a persisted pending order.

The build is all-or-nothing: every line is validated and every product is
resolved before anything is written, and the write itself happens inside the
calling command's unit of work.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError

from storefront.catalogue.lookup.port import ProductLookup
from storefront.errors import ProductUnavailable
from storefront.utils.logging import get_logger

from .order import Order

logger = get_logger(__name__)


@dataclass(frozen=True)
class LineRequest:
    product_id: str
    quantity: int


def parse_line_requests(raw_items) -> list[LineRequest]:
    """Validate raw ``{product_id, quantity}`` dicts into line requests.

    Error messages name the offending line by its 1-based position.
    """
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError({"items": ["At least one order line is required"]})

    requests = []
    for position, raw in enumerate(raw_items, start=1):
        if not isinstance(raw, dict):
            raise ValidationError({"items": [f"Line {position}: expected an object with product_id and quantity"]})

        product_id = raw.get("product_id")
        if product_id is None or str(product_id).strip() == "":
            raise ValidationError({"items": [f"Line {position}: product_id is required"]})

        quantity = raw.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(
                {"items": [f"Line {position}: quantity must be a positive integer, got {quantity!r}"]}
            )

        requests.append(LineRequest(product_id=str(product_id), quantity=quantity))
    return requests


class OrderBuilder:
    def __init__(self, users, products: ProductLookup, orders) -> None:
        self._users = users
        self._products = products
        self._orders = orders

    def build(self, user_id, requests: list[LineRequest]) -> Order:
        """Validate the user, price every line, and persist the order.

        Raises UserNotFound, ProductNotFound, ProductUnavailable or
        ValidationError; nothing is persisted in any of those cases.
        """
        if not requests:
            raise ValidationError({"items": ["At least one order line is required"]})

        user = self._users.find_by_id(user_id)

        lines = []
        for request in requests:
            snapshot = self._products.find_by_id(request.product_id)
            if not snapshot.is_available:
                raise ProductUnavailable(snapshot.product_id)
            lines.append((snapshot.product_id, request.quantity, snapshot.unit_price))

        order = Order.place(user_id=user.id, lines=lines)
        self._orders.create(order)

        logger.info(
            "order_built",
            order_id=str(order.id),
            user_id=str(user.id),
            item_count=len(lines),
            total_price=order.total_price,
        )
        return order
