"""Failure taxonomy for the storefront domain.

Input validation reuses Protean's ``ValidationError``. The classes below cover
the outcomes Protean has no exception for, so that the API layer can classify
every failure without looking at storage error text.
"""

from protean.exceptions import ValidationError


class StorefrontError(Exception):
    """Base class for classified domain failures."""

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class NotFoundError(StorefrontError):
    entity = "Entity"

    def __init__(self, identifier, message: str | None = None):
        super().__init__(message or f"{self.entity} not found", identifier=str(identifier))
        self.identifier = str(identifier)


class UserNotFound(NotFoundError):
    entity = "User"


class ProductNotFound(NotFoundError):
    entity = "Product"


class OrderNotFound(NotFoundError):
    entity = "Order"


class Forbidden(StorefrontError):
    """The acting user lacks the role or ownership the operation requires."""


class InvalidTransition(StorefrontError):
    """The order's current status does not admit the requested change."""


class ProductUnavailable(ValidationError):
    """A requested product exists but has been discontinued."""

    def __init__(self, product_id):
        super().__init__({"product_id": [f"Product {product_id} is no longer available"]})
        self.product_id = str(product_id)


class InternalError(StorefrontError):
    """Storage or assembly failure; details are logged, never returned to callers."""


class StoreUnavailable(InternalError):
    pass


class OrderAssemblyError(InternalError):
    pass
