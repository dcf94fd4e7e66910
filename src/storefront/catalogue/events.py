"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """Catalogue price changed. Orders already placed keep their price snapshot."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDiscontinued:
    __version__ = 1

    product_id = Identifier(required=True)
    discontinued_at = DateTime(required=True)
