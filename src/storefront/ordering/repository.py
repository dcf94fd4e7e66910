"""Order Store — persistence for orders and their line items.

The store performs no authorization and no transition checks; those belong
to the Order aggregate. Every write goes through Protean's unit of work, so an
order and all of its items are committed or discarded together.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import OrderNotFound
from storefront.identity.user import User
from storefront.utils.storage import storage_errors

from .order import Order, parse_status


@dataclass(frozen=True)
class OrderDetails:
    """An order together with the user and products it references."""

    order: Order
    user: User | None
    products: dict = field(default_factory=dict)  # product_id -> Product


@storefront.repository(part_of=Order)
class OrderRepository:
    def create(self, order: Order) -> Order:
        """Insert the order and every line item as one logical write."""
        if not order.items:
            raise ValidationError({"items": ["An order must contain at least one item"]})
        self.add(order)
        return order

    def find_by_id(self, order_id) -> Order:
        """Load an order or raise OrderNotFound."""
        with storage_errors("Order", order_id=str(order_id)):
            try:
                return self.get(str(order_id))
            except ObjectNotFoundError:
                raise OrderNotFound(order_id) from None

    def list_by_user(self, user_id) -> list[Order]:
        """All orders of a user, oldest first. Not paginated."""
        with storage_errors("Order", user_id=str(user_id)):
            # limit(None) goes last: every clone resets it to the aggregate default
            return self._dao.query.filter(user_id=str(user_id)).order_by("created_at").limit(None).all().items

    def update_status(self, order_id, status) -> None:
        """Overwrite the status field. Legality is the caller's concern."""
        order = self.find_by_id(order_id)
        order.status = parse_status(status).value
        order.updated_at = datetime.now(UTC)
        self.add(order)

    def load_with_details(self, order_id) -> OrderDetails | None:
        """Reload an order with its user and products.

        Returns None when the order does not exist. Any other failure is
        raised as StoreUnavailable.
        """
        with storage_errors("Order", order_id=str(order_id)):
            try:
                order = self.get(str(order_id))
            except ObjectNotFoundError:
                return None

        user = _get_or_none(User, order.user_id)
        products = {}
        for item in order.items:
            product = _get_or_none(Product, item.product_id)
            if product is not None:
                products[str(item.product_id)] = product

        return OrderDetails(order=order, user=user, products=products)


def _get_or_none(aggregate_cls, identifier):
    with storage_errors(aggregate_cls.__name__, identifier=str(identifier)):
        try:
            return current_domain.repository_for(aggregate_cls).get(str(identifier))
        except ObjectNotFoundError:
            return None
