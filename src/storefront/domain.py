"""Storefront bounded context: users, product catalogue and order workflow.

Users, products and orders share one domain so that placing an order can
read the acting user and every product price inside a single unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
