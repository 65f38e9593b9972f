"""Unit tests for the Order aggregate and its snapshot items."""

import pytest

from smartcart.domain.exceptions import ValidationError
from smartcart.domain.model.order import (
    UNKNOWN_PRODUCT_NAME,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)
from smartcart.domain.model.product import Product
from smartcart.domain.model.session import SessionItem, ShoppingSession
from smartcart.domain.model.value_objects import Money

MILK = Product(product_id="p1", barcode="0001", name="Milk", price=Money.of("10.00"), category="Dairy")


def _items(quantity: int = 5) -> list[SessionItem]:
    item = SessionItem.first_scan("s1", MILK)
    item.change_quantity(quantity)
    return [item]


class TestOrderCreate:

    def test_totals(self):
        session = ShoppingSession.start("CART_002", "u1")
        order = Order.create(session, _items(5), "cash", Money.of("5.00"))
        assert order.total_amount == Money.of("50.00")
        assert order.discount_amount == Money.of("5.00")
        assert order.final_amount == Money.of("45.00")
        assert order.session_id == session.session_id
        assert order.user_id == "u1"
        assert order.payment_status == PaymentStatus.COMPLETED
        assert order.order_status == OrderStatus.COMPLETED

    def test_discount_larger_than_total_clamps_to_zero(self):
        session = ShoppingSession.start("CART_002", "u1")
        order = Order.create(session, _items(1), "cash", Money.of("25.00"))
        assert order.final_amount == Money.zero()
        assert order.discount_amount == Money.of("25.00")

    def test_payment_method_required(self):
        session = ShoppingSession.start("CART_002", "u1")
        with pytest.raises(ValidationError, match="Payment method is required"):
            Order.create(session, _items(), " ", Money.zero())

    def test_totals_frozen_against_later_item_changes(self):
        session = ShoppingSession.start("CART_002", "u1")
        items = _items(2)
        order = Order.create(session, items, "card", Money.zero())
        items[0].change_quantity(9)
        assert order.total_amount == Money.of("20.00")


class TestOrderItemSnapshot:

    def test_copies_product_name_and_category(self):
        item = _items(3)[0]
        line = OrderItem.snapshot("o1", item, MILK)
        assert line.product_name == "Milk"
        assert line.category == "Dairy"
        assert line.quantity == 3
        assert line.total_price == Money.of("30.00")

    def test_missing_product_gets_placeholder(self):
        line = OrderItem.snapshot("o1", _items(1)[0], None)
        assert line.product_name == UNKNOWN_PRODUCT_NAME
        assert line.category is None

    def test_id_is_deterministic_per_order_and_item(self):
        item = _items(1)[0]
        assert OrderItem.snapshot("o1", item, MILK).order_item_id == OrderItem.id_for("o1", item.item_id)
        assert OrderItem.id_for("o1", item.item_id) != OrderItem.id_for("o2", item.item_id)
