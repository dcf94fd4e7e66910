"""Order cancellation — command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.ordering.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_id(command.order_id)
        actor = current_domain.repository_for(User).find_by_id(command.actor_id)

        order.cancel(actor_id=actor.id, actor_role=actor.role_name if actor.is_active else None)
        repo.add(order)
        logger.info("order_canceled", order_id=str(order.id), canceled_by=str(actor.id))
