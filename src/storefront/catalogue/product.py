"""Product aggregate root."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.catalogue.events import ProductAdded, ProductDiscontinued, ProductPriceChanged
from storefront.domain import storefront


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    quantity = Integer(default=0, min_value=0)
    stock = Integer(default=0, min_value=0)
    is_available = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, name, price, description=None, quantity=0, stock=0):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            stock=stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                added_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, stock=None):
        """Apply a partial update. Fields left as None are unchanged."""
        now = datetime.now(UTC)

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if stock is not None:
            self.stock = stock

        if price is not None and price != self.price:
            if price < 0:
                raise ValidationError({"price": ["Price cannot be negative"]})
            previous_price = self.price
            self.price = price
            self.raise_(
                ProductPriceChanged(
                    product_id=str(self.id),
                    previous_price=previous_price,
                    new_price=price,
                    changed_at=now,
                )
            )

        self.updated_at = now

    def discontinue(self):
        if not self.is_available:
            raise ValidationError({"is_available": ["Product is already discontinued"]})

        now = datetime.now(UTC)
        self.is_available = False
        self.updated_at = now
        self.raise_(
            ProductDiscontinued(
                product_id=str(self.id),
                discontinued_at=now,
            )
        )
