"""Product lookup backed by the Product repository."""

from protean.domain import Domain

from storefront.catalogue.lookup.port import ProductLookup, ProductSnapshot
from storefront.catalogue.product import Product
from storefront.errors import ProductNotFound, StoreUnavailable
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class RepositoryProductLookup(ProductLookup):
    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def find_by_id(self, product_id: str) -> ProductSnapshot:
        repo = self._domain.repository_for(Product)
        try:
            product = repo.find_by_id(product_id)
        except (ProductNotFound, StoreUnavailable):
            raise
        except Exception as exc:
            logger.error("product_lookup_failed", product_id=str(product_id), error=str(exc))
            raise StoreUnavailable("Unable to read the product catalogue", product_id=str(product_id)) from exc

        return ProductSnapshot(
            product_id=str(product.id),
            name=product.name,
            unit_price=product.price,
            is_available=bool(product.is_available),
        )
