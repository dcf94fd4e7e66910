"""Product lookup port.

The order builder resolves prices through this contract only. A missing
product and a storage failure are different outcomes: callers answer the
first with a client error and the second with a server error.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSnapshot:
    """Price and availability of a product at the instant it was read."""

    product_id: str
    name: str
    unit_price: float
    is_available: bool


class ProductLookup(ABC):
    @abstractmethod
    def find_by_id(self, product_id: str) -> ProductSnapshot:
        """Return the product's current snapshot.

        Raises ProductNotFound when no such product exists and
        StoreUnavailable when the catalogue cannot be read.
        """
        ...
