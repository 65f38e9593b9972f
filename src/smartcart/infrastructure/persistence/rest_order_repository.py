"""Row-store implementation of OrderRepository (orders + order_items)."""

from __future__ import annotations

from smartcart.domain.model.order import Order, OrderItem, OrderStatus, PaymentStatus
from smartcart.domain.repository.order_repository import OrderRepository
from smartcart.infrastructure.persistence.rows import compact, decoding, money
from smartcart.infrastructure.rest.row_store_client import RowStoreClient

ORDERS = "orders"
ORDER_ITEMS = "order_items"


class RestOrderRepository(OrderRepository):

    def __init__(self, client: RowStoreClient) -> None:
        self._client = client

    # --- OrderRepository interface ----------------------------------------------

    def get_by_session(self, session_id: str) -> Order | None:
        rows = self._client.query(ORDERS, {"sessionId": session_id})
        return self._to_domain(rows[0]) if rows else None

    def add(self, order: Order) -> None:
        self._client.insert(ORDERS, self._to_raw(order))

    def list_items(self, order_id: str) -> list[OrderItem]:
        rows = self._client.query(ORDER_ITEMS, {"orderId": order_id})
        return [self._item_to_domain(raw) for raw in rows]

    def add_item(self, item: OrderItem) -> None:
        self._client.insert(ORDER_ITEMS, self._item_to_raw(item))

    # --- Serialization ----------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "orderId": order.order_id,
            "sessionId": order.session_id,
            "userId": order.user_id,
            "totalAmount": order.total_amount.to_float(),
            "discountAmount": order.discount_amount.to_float(),
            "finalAmount": order.final_amount.to_float(),
            "paymentMethod": order.payment_method,
            "paymentStatus": order.payment_status.value,
            "orderStatus": order.order_status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        with decoding(ORDERS):
            return Order(
                order_id=raw["orderId"],
                session_id=raw["sessionId"],
                user_id=raw["userId"],
                total_amount=money(raw["totalAmount"]),
                discount_amount=money(raw.get("discountAmount")),
                final_amount=money(raw["finalAmount"]),
                payment_method=raw["paymentMethod"],
                payment_status=PaymentStatus(raw.get("paymentStatus", "completed")),
                order_status=OrderStatus(raw.get("orderStatus", "completed")),
            )

    @staticmethod
    def _item_to_raw(item: OrderItem) -> dict:
        return compact(
            {
                "orderItemId": item.order_item_id,
                "orderId": item.order_id,
                "productId": item.product_id,
                "productName": item.product_name,
                "barcode": item.barcode,
                "quantity": item.quantity,
                "unitPrice": item.unit_price.to_float(),
                "totalPrice": item.total_price.to_float(),
                "category": item.category,
            }
        )

    @staticmethod
    def _item_to_domain(raw: dict) -> OrderItem:
        with decoding(ORDER_ITEMS):
            return OrderItem(
                order_item_id=raw["orderItemId"],
                order_id=raw["orderId"],
                product_id=raw["productId"],
                product_name=raw["productName"],
                barcode=raw["barcode"],
                quantity=int(raw["quantity"]),
                unit_price=money(raw["unitPrice"]),
                total_price=money(raw["totalPrice"]),
                category=raw.get("category"),
            )
