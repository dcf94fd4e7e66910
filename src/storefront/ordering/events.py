"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A user placed an order; line prices are frozen as of this moment."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of line snapshots
    item_count = Integer(required=True)
    total_price = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCanceled:
    __version__ = 1

    order_id = Identifier(required=True)
    canceled_by = Identifier(required=True)
    actor_role = String(required=True)
    canceled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusUpdated:
    """An administrator set the order's status directly."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    updated_at = DateTime(required=True)
