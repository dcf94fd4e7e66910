"""Tests for the Order state machine: cancellation and admin status updates."""

import pytest
from protean.exceptions import ValidationError
from storefront.errors import Forbidden, InvalidTransition
from storefront.ordering.events import OrderCanceled, OrderStatusUpdated
from storefront.ordering.order import TERMINAL_STATUSES, Order, OrderStatus, parse_status

OWNER = "owner-1"
STRANGER = "stranger-1"
ADMIN = "admin-1"


def _order_at_state(status=OrderStatus.PENDING):
    order = Order.place(user_id=OWNER, lines=[("P1", 1, 10.0)])
    order.status = status.value
    order._events.clear()
    return order


class TestTransitionGraph:
    def test_pending_can_reach_every_other_status(self):
        order = _order_at_state()
        for target in (OrderStatus.COMPLETED, OrderStatus.SHIPPED, OrderStatus.CANCELED):
            assert order.can_transition_to(target)

    @pytest.mark.parametrize("status", [OrderStatus.COMPLETED, OrderStatus.SHIPPED, OrderStatus.CANCELED])
    def test_terminal_statuses_have_no_exits(self, status):
        order = _order_at_state(status)
        assert status in TERMINAL_STATUSES
        assert not any(order.can_transition_to(target) for target in OrderStatus)

    def test_pending_is_not_terminal(self):
        assert OrderStatus.PENDING not in TERMINAL_STATUSES

    def test_parse_status_rejects_unknown_value(self):
        with pytest.raises(ValidationError):
            parse_status("Delivered")

    def test_parse_status_is_case_sensitive(self):
        with pytest.raises(ValidationError):
            parse_status("pending")


class TestCancel:
    def test_owner_cancels_pending_order(self):
        order = _order_at_state()
        order.cancel(actor_id=OWNER, actor_role="User")

        assert order.status == OrderStatus.CANCELED.value
        assert isinstance(order._events[-1], OrderCanceled)
        assert order._events[-1].canceled_by == OWNER

    def test_admin_cancels_someone_elses_order(self):
        order = _order_at_state()
        order.cancel(actor_id=ADMIN, actor_role="Admin")
        assert order.status == OrderStatus.CANCELED.value

    def test_stranger_is_forbidden(self):
        order = _order_at_state()
        with pytest.raises(Forbidden):
            order.cancel(actor_id=STRANGER, actor_role="User")
        assert order.status == OrderStatus.PENDING.value
        assert order._events == []

    def test_owner_without_role_is_forbidden(self):
        order = _order_at_state()
        with pytest.raises(Forbidden):
            order.cancel(actor_id=OWNER, actor_role=None)
        assert order.status == OrderStatus.PENDING.value

    @pytest.mark.parametrize("status", [OrderStatus.COMPLETED, OrderStatus.SHIPPED, OrderStatus.CANCELED])
    def test_non_pending_order_cannot_be_canceled(self, status):
        order = _order_at_state(status)
        with pytest.raises(InvalidTransition) as exc:
            order.cancel(actor_id=OWNER, actor_role="User")

        assert "Only pending orders can be canceled" in str(exc.value)
        assert order.status == status.value

    def test_admin_cannot_cancel_completed_order(self):
        order = _order_at_state(OrderStatus.COMPLETED)
        with pytest.raises(InvalidTransition):
            order.cancel(actor_id=ADMIN, actor_role="Admin")

    def test_cancel_updates_timestamp(self):
        order = _order_at_state()
        before = order.updated_at
        order.cancel(actor_id=OWNER, actor_role="User")
        assert order.updated_at >= before


class TestUpdateStatus:
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_admin_may_set_any_recognized_status(self, target):
        order = _order_at_state()
        order.update_status(target.value, actor_role="Admin")
        assert order.status == target.value

    def test_permissive_mode_allows_leaving_terminal_status(self):
        order = _order_at_state(OrderStatus.COMPLETED)
        order.update_status("Pending", actor_role="Admin")
        assert order.status == OrderStatus.PENDING.value

    def test_event_records_previous_and_new_status(self):
        order = _order_at_state()
        order.update_status("Shipped", actor_role="Admin")

        event = order._events[-1]
        assert isinstance(event, OrderStatusUpdated)
        assert event.previous_status == "Pending"
        assert event.new_status == "Shipped"

    @pytest.mark.parametrize("role", ["User", None])
    def test_non_admin_is_forbidden(self, role):
        order = _order_at_state()
        with pytest.raises(Forbidden):
            order.update_status("Shipped", actor_role=role)
        assert order.status == OrderStatus.PENDING.value

    @pytest.mark.parametrize("role", ["Admin", "User", None])
    def test_unrecognized_status_is_validation_error_for_every_actor(self, role):
        order = _order_at_state()
        with pytest.raises(ValidationError):
            order.update_status("Refunded", actor_role=role)
        assert order.status == OrderStatus.PENDING.value


class TestStrictStatusUpdates:
    def test_strict_mode_blocks_leaving_terminal_status(self):
        order = _order_at_state(OrderStatus.COMPLETED)
        with pytest.raises(InvalidTransition):
            order.update_status("Pending", actor_role="Admin", strict=True)
        assert order.status == OrderStatus.COMPLETED.value

    def test_strict_mode_allows_graph_transitions(self):
        order = _order_at_state()
        order.update_status("Shipped", actor_role="Admin", strict=True)
        assert order.status == OrderStatus.SHIPPED.value

    def test_strict_mode_accepts_same_status(self):
        order = _order_at_state(OrderStatus.SHIPPED)
        order.update_status("Shipped", actor_role="Admin", strict=True)
        assert order.status == OrderStatus.SHIPPED.value
