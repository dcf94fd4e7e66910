"""Tests for the Order aggregate factory: pricing, line items and events."""

import json

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.events import OrderPlaced
from storefront.ordering.order import Order, OrderItem, OrderStatus


class TestOrderPlacement:
    def test_scenario_two_lines_total(self):
        order = Order.place(user_id="user-1", lines=[("P1", 2, 10.0), ("P2", 3, 5.0)])

        assert order.total_price == 35.0
        assert order.status == OrderStatus.PENDING.value
        assert len(order.items) == 2

    def test_line_totals_are_quantity_times_unit_price(self):
        order = Order.place(user_id="user-1", lines=[("P1", 2, 10.0), ("P2", 3, 5.0)])

        totals = {item.product_id: item.total_price for item in order.items}
        assert totals == {"P1": 20.0, "P2": 15.0}

    def test_unit_price_snapshot_is_stored_on_each_line(self):
        order = Order.place(user_id="user-1", lines=[("P1", 4, 2.5)])
        assert order.items[0].unit_price == 2.5

    def test_total_is_left_to_right_sum_of_line_totals(self):
        lines = [("A", 3, 0.1), ("B", 7, 0.2), ("C", 1, 0.3)]
        expected = 0.0
        for _, quantity, price in lines:
            expected += quantity * price

        order = Order.place(user_id="user-1", lines=lines)
        assert order.total_price == expected

    def test_timestamps_set(self):
        order = Order.place(user_id="user-1", lines=[("P1", 1, 1.0)])
        assert order.created_at is not None
        assert order.updated_at == order.created_at

    def test_empty_lines_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(user_id="user-1", lines=[])
        assert "items" in exc.value.messages

    def test_zero_price_products_allowed(self):
        order = Order.place(user_id="user-1", lines=[("FREE", 2, 0.0)])
        assert order.total_price == 0.0


class TestOrderPlacedEvent:
    def test_event_raised(self):
        order = Order.place(user_id="user-1", lines=[("P1", 2, 10.0), ("P2", 3, 5.0)])

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.user_id == "user-1"
        assert event.item_count == 2
        assert event.total_price == 35.0

    def test_event_carries_line_snapshots(self):
        order = Order.place(user_id="user-1", lines=[("P1", 2, 10.0)])
        items = json.loads(order._events[0].items)
        assert items == [{"product_id": "P1", "quantity": 2, "unit_price": 10.0, "total_price": 20.0}]


class TestOrderItemEntity:
    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="P1", quantity=0, unit_price=1.0, total_price=0.0)

    def test_unit_price_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="P1", quantity=1, unit_price=-1.0, total_price=-1.0)
