"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.errors import Forbidden, InvalidTransition
from storefront.ordering.cancellation import CancelOrder
from storefront.ordering.order import Order
from storefront.ordering.status_update import UpdateOrderStatus


@pytest.fixture()
def actors():
    """User ids by scenario name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the exception raised by a When step, if any."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a customer "{name}"'))
def _(actors, register_user, name):
    actors[name] = register_user(name=name)


@given(parsers.cfparse('an administrator "{name}"'))
def _(actors, register_user, name):
    actors[name] = register_user(name=name, role="Admin")


@given(
    parsers.cfparse(
        '"{name}" has placed an order for {qty1:d} units at {price1:f} and {qty2:d} units at {price2:f}'
    ),
    target_fixture="order_id",
)
def _(actors, add_product, place_order, name, qty1, price1, qty2, price2):
    first = add_product(name="First", price=price1)
    second = add_product(name="Second", price=price2)
    return place_order(actors[name], [(first, qty1), (second, qty2)])


@given(parsers.cfparse('"{name}" has canceled the order'))
def _(actors, order_id, name):
    current_domain.process(CancelOrder(order_id=order_id, actor_id=actors[name]), asynchronous=False)


@given(parsers.cfparse('the order has been marked "{status}" by "{name}"'))
def _(actors, order_id, status, name):
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, status=status, actor_id=actors[name]),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then("the cancellation is refused as forbidden")
def _(outcome):
    assert isinstance(outcome["exc"], Forbidden)


@then("the cancellation is refused because the order is not pending")
def _(outcome):
    assert isinstance(outcome["exc"], InvalidTransition)
    assert outcome["exc"].message == "Only pending orders can be canceled"
