"""Order aggregate with its OrderItem line entities and status state machine.

State Machine:
    PENDING → COMPLETED | SHIPPED | CANCELED
    COMPLETED, SHIPPED and CANCELED are terminal.

Cancellation walks the graph and is open to the order's owner and to admins.
A status update is admin-only and, unless strict mode is on, may set any of the
four recognized statuses regardless of the current one.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.errors import Forbidden, InvalidTransition
from storefront.identity.user import Role
from storefront.ordering.events import OrderCanceled, OrderPlaced, OrderStatusUpdated


class OrderStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    SHIPPED = "Shipped"
    CANCELED = "Canceled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.COMPLETED, OrderStatus.SHIPPED, OrderStatus.CANCELED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.SHIPPED: set(),  # Terminal
    OrderStatus.CANCELED: set(),  # Terminal
}

TERMINAL_STATUSES = frozenset(s for s, targets in _VALID_TRANSITIONS.items() if not targets)


def parse_status(value) -> OrderStatus:
    """Return the OrderStatus named by value, or raise ValidationError."""
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(
            {"status": [f"Invalid status '{value}'. Expected one of: {', '.join(s.value for s in OrderStatus)}"]}
        ) from None


@storefront.entity(part_of="Order")
class OrderItem:
    """One product line of an order, priced at the moment the order was placed."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    total_price = Float(required=True, min_value=0.0)
    status = String(max_length=20, choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines):
        """Assemble a pending order from priced lines.

        Args:
            user_id: The user placing the order.
            lines: Iterable of (product_id, quantity, unit_price) tuples. Line
                totals and the order total are summed in the given order.
        """
        lines = list(lines)
        if not lines:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        items = []
        total_price = 0.0
        for product_id, quantity, unit_price in lines:
            line_total = quantity * unit_price
            total_price += line_total
            items.append(
                OrderItem(
                    product_id=str(product_id),
                    quantity=quantity,
                    unit_price=unit_price,
                    total_price=line_total,
                )
            )

        now = datetime.now(UTC)
        order = cls(
            user_id=str(user_id),
            total_price=total_price,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(
                    [
                        {
                            "product_id": item.product_id,
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                            "total_price": item.total_price,
                        }
                        for item in items
                    ]
                ),
                item_count=len(items),
                total_price=total_price,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def _assert_can_transition(self, target_status: OrderStatus, message: str | None = None):
        current = OrderStatus(self.status)
        if not self.can_transition_to(target_status):
            raise InvalidTransition(
                message or f"Cannot transition from {current.value} to {target_status.value}",
                order_id=str(self.id),
                current_status=current.value,
                requested_status=target_status.value,
            )

    def is_owned_by(self, user_id) -> bool:
        return user_id is not None and str(self.user_id) == str(user_id)

    def cancel(self, actor_id, actor_role):
        """Cancel a pending order on behalf of its owner or an admin.

        actor_role is the role stored on the acting user; None (no usable
        role) is refused outright.
        """
        is_admin = actor_role == Role.ADMIN.value
        is_owner = actor_role is not None and self.is_owned_by(actor_id)
        if not (is_admin or is_owner):
            raise Forbidden(
                "Access denied: you cannot cancel this order",
                order_id=str(self.id),
                actor_id=str(actor_id),
            )

        self._assert_can_transition(OrderStatus.CANCELED, "Only pending orders can be canceled")

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELED.value
        self.updated_at = now

        self.raise_(
            OrderCanceled(
                order_id=str(self.id),
                canceled_by=str(actor_id),
                actor_role=actor_role,
                canceled_at=now,
            )
        )

    def update_status(self, new_status, actor_role, strict=False):
        """Set the order status on behalf of an admin.

        The status value is checked before the actor, so an unrecognized
        status is a ValidationError for every caller. With strict=True the
        transition graph applies as well.
        """
        target = parse_status(new_status)

        if actor_role != Role.ADMIN.value:
            raise Forbidden("Only administrators can update order status", order_id=str(self.id))

        if strict and target != OrderStatus(self.status):
            self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusUpdated(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                updated_at=now,
            )
        )
