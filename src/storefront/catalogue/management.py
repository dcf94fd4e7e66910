"""Catalogue management — commands and handler. Administrators only."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import Forbidden
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    actor_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    quantity = Integer(default=0, min_value=0)
    stock = Integer(default=0, min_value=0)


@storefront.command(part_of="Product")
class UpdateProduct:
    actor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    stock = Integer(min_value=0)


@storefront.command(part_of="Product")
class DiscontinueProduct:
    actor_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _require_admin(actor_id):
    actor = current_domain.repository_for(User).find_by_id(actor_id)
    if not actor.is_admin:
        raise Forbidden("Only administrators can manage the catalogue", actor_id=str(actor.id))
    return actor


@storefront.command_handler(part_of=Product)
class ManageCatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        _require_admin(command.actor_id)
        product = Product.add(
            name=command.name,
            price=command.price,
            description=command.description,
            quantity=command.quantity or 0,
            stock=command.stock or 0,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        _require_admin(command.actor_id)
        repo = current_domain.repository_for(Product)
        product = repo.find_by_id(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
        )
        repo.add(product)

    @handle(DiscontinueProduct)
    def discontinue_product(self, command):
        _require_admin(command.actor_id)
        repo = current_domain.repository_for(Product)
        product = repo.find_by_id(command.product_id)
        product.discontinue()
        repo.add(product)
        logger.info("product_discontinued", product_id=str(product.id))
