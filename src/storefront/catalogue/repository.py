"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.errors import ProductNotFound
from storefront.utils.storage import storage_errors

from .product import Product


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product:
        """Load a product or raise ProductNotFound."""
        with storage_errors("Product", product_id=str(product_id)):
            try:
                return self.get(str(product_id))
            except ObjectNotFoundError:
                raise ProductNotFound(product_id) from None

    def list_all(self) -> list[Product]:
        """Every product, oldest first. Not paginated."""
        with storage_errors("Product"):
            return self._dao.query.order_by("created_at").limit(None).all().items
