import json

import pytest
from protean import current_domain
from storefront.ordering.placement import PlaceOrder


@pytest.fixture()
def place_order():
    """Factory: place an order through the PlaceOrder command and return its id."""

    def _place(user_id, lines):
        return current_domain.process(
            PlaceOrder(
                user_id=user_id,
                items=json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in lines]),
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture()
def p1(add_product):
    return add_product(name="P1", price=10.0)


@pytest.fixture()
def p2(add_product):
    return add_product(name="P2", price=5.0)


@pytest.fixture()
def pending_order_id(place_order, customer_id, p1, p2):
    return place_order(customer_id, [(p1, 2), (p2, 3)])
