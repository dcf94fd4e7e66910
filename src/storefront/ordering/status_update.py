"""Administrative order status update — command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import Forbidden
from storefront.identity.user import User
from storefront.ordering.order import Order, parse_status
from storefront.utils.logging import get_logger
from storefront.utils.settings import custom_setting

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    actor_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        # Status value first, then role, then the order itself
        target = parse_status(command.status)

        actor = current_domain.repository_for(User).find_by_id(command.actor_id)
        if not actor.is_admin:
            raise Forbidden("Only administrators can update order status", actor_id=str(actor.id))

        repo = current_domain.repository_for(Order)
        order = repo.find_by_id(command.order_id)
        previous = order.status
        order.update_status(
            target.value,
            actor_role=actor.role_name,
            strict=bool(custom_setting("strict_status_updates", False)),
        )
        repo.add(order)
        logger.info(
            "order_status_updated",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            updated_by=str(actor.id),
        )
