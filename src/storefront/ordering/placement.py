"""Order placement — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.catalogue.lookup.repository_adapter import RepositoryProductLookup
from storefront.domain import storefront
from storefront.identity.user import User
from storefront.ordering.builder import OrderBuilder, parse_line_requests
from storefront.ordering.order import Order


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            raw_items = json.loads(command.items) if isinstance(command.items, str) else command.items
        except json.JSONDecodeError:
            raise ValidationError({"items": ["Items must be valid JSON"]}) from None

        builder = OrderBuilder(
            users=current_domain.repository_for(User),
            products=RepositoryProductLookup(current_domain),
            orders=current_domain.repository_for(Order),
        )
        order = builder.build(command.user_id, parse_line_requests(raw_items))
        return str(order.id)
