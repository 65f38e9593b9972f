"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the REST repositories
but keep everything in dicts.  Entities are copied on the way in and out
so that, like the real store, mutating a returned object changes nothing
until it is saved.  ``fail(method, exc)`` makes the next calls to a
method raise, for partial-failure tests.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from smartcart.application.session_orchestrator import SessionOrchestrator
from smartcart.domain.exceptions import DomainException
from smartcart.domain.model.cart import Cart, CartStatus
from smartcart.domain.model.order import Order, OrderItem
from smartcart.domain.model.product import Product
from smartcart.domain.model.session import SessionItem, ShoppingSession
from smartcart.domain.model.user import User
from smartcart.domain.model.value_objects import Money
from smartcart.domain.repository.cart_repository import CartRepository
from smartcart.domain.repository.order_repository import OrderRepository
from smartcart.domain.repository.product_repository import ProductRepository
from smartcart.domain.repository.session_item_repository import SessionItemRepository
from smartcart.domain.repository.session_repository import SessionRepository
from smartcart.domain.repository.user_repository import UserRepository


class _FaultInjection:

    def __init__(self) -> None:
        self._failures: dict[str, DomainException] = {}

    def fail(self, method: str, exc: DomainException) -> None:
        self._failures[method] = exc

    def heal(self, method: str | None = None) -> None:
        if method is None:
            self._failures.clear()
        else:
            self._failures.pop(method, None)

    def _check(self, method: str) -> None:
        exc = self._failures.get(method)
        if exc is not None:
            raise exc


class FakeCartRepository(_FaultInjection, CartRepository):

    def __init__(self, carts: list[Cart] | None = None) -> None:
        super().__init__()
        self._store: dict[str, Cart] = {c.cart_id: copy.deepcopy(c) for c in carts or []}

    def get_by_code(self, cart_id: str) -> Cart | None:
        self._check("get_by_code")
        return copy.deepcopy(self._store.get(cart_id))

    def set_status(self, cart_id: str, status: CartStatus) -> None:
        self._check("set_status")
        if cart_id in self._store:
            self._store[cart_id].status = status

    def status_of(self, cart_id: str) -> CartStatus:
        return self._store[cart_id].status


class FakeSessionRepository(_FaultInjection, SessionRepository):

    def __init__(self) -> None:
        super().__init__()
        self._store: dict[str, ShoppingSession] = {}

    def get_by_id(self, session_id: str) -> ShoppingSession | None:
        self._check("get_by_id")
        return copy.deepcopy(self._store.get(session_id))

    def add(self, session: ShoppingSession) -> None:
        self._check("add")
        self._store[session.session_id] = copy.deepcopy(session)

    def save_completion(self, session: ShoppingSession) -> None:
        self._check("save_completion")
        stored = self._store[session.session_id]
        stored.status = session.status
        stored.completed_at = session.completed_at
        stored.total_amount = session.total_amount

    def all(self) -> list[ShoppingSession]:
        return list(self._store.values())


class FakeSessionItemRepository(_FaultInjection, SessionItemRepository):

    def __init__(self) -> None:
        super().__init__()
        self._store: dict[str, SessionItem] = {}

    def get_by_id(self, item_id: str) -> SessionItem | None:
        self._check("get_by_id")
        return copy.deepcopy(self._store.get(item_id))

    def find_by_barcode(self, session_id: str, barcode: str) -> SessionItem | None:
        self._check("find_by_barcode")
        for item in self._store.values():
            if item.session_id == session_id and item.barcode == barcode:
                return copy.deepcopy(item)
        return None

    def list_for_session(self, session_id: str) -> list[SessionItem]:
        self._check("list_for_session")
        return [copy.deepcopy(i) for i in self._store.values() if i.session_id == session_id]

    def add(self, item: SessionItem) -> None:
        self._check("add")
        self._store[item.item_id] = copy.deepcopy(item)

    def save_quantity(self, item: SessionItem) -> None:
        self._check("save_quantity")
        self._store[item.item_id].quantity = item.quantity

    def delete(self, item_id: str) -> None:
        self._check("delete")
        self._store.pop(item_id, None)

    def session_id_of(self, item_id: str) -> str | None:
        self._check("session_id_of")
        item = self._store.get(item_id)
        return item.session_id if item is not None else None

    def insert_external(self, item: SessionItem) -> None:
        """Simulate a write by another device, bypassing the orchestrator."""
        self._store[item.item_id] = copy.deepcopy(item)


class FakeProductRepository(_FaultInjection, ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        super().__init__()
        self._store: dict[str, Product] = {p.product_id: p for p in products or []}

    def get_by_id(self, product_id: str) -> Product | None:
        self._check("get_by_id")
        return self._store.get(product_id)

    def get_by_barcode(self, barcode: str) -> Product | None:
        self._check("get_by_barcode")
        for p in self._store.values():
            if p.barcode == barcode:
                return p
        return None

    def list_all(self) -> list[Product]:
        self._check("list_all")
        return list(self._store.values())

    def remove(self, product_id: str) -> None:
        self._store.pop(product_id, None)


class FakeOrderRepository(_FaultInjection, OrderRepository):

    def __init__(self) -> None:
        super().__init__()
        self._orders: dict[str, Order] = {}
        self._items: dict[str, OrderItem] = {}
        self.add_item_budget: int | None = None

    def get_by_session(self, session_id: str) -> Order | None:
        self._check("get_by_session")
        for order in self._orders.values():
            if order.session_id == session_id:
                return order
        return None

    def add(self, order: Order) -> None:
        self._check("add")
        self._orders[order.order_id] = order

    def list_items(self, order_id: str) -> list[OrderItem]:
        self._check("list_items")
        return [i for i in self._items.values() if i.order_id == order_id]

    def add_item(self, item: OrderItem) -> None:
        if self.add_item_budget is not None:
            if self.add_item_budget <= 0:
                self._check("add_item")
            self.add_item_budget -= 1
        else:
            self._check("add_item")
        self._items[item.order_item_id] = item

    def all_orders(self) -> list[Order]:
        return list(self._orders.values())


class FakeUserRepository(_FaultInjection, UserRepository):

    def __init__(self, users: list[User] | None = None) -> None:
        super().__init__()
        self._store: dict[str, User] = {u.user_id: u for u in users or []}

    def get_by_id(self, user_id: str) -> User | None:
        self._check("get_by_id")
        return self._store.get(user_id)

    def add(self, user: User) -> None:
        self._check("add")
        self._store[user.user_id] = user


# --- Fixtures --------------------------------------------------------------------


def default_products() -> list[Product]:
    return [
        Product(product_id="p1", barcode="0001", name="Milk", price=Money.of("10.00"), category="Dairy"),
        Product(product_id="p2", barcode="0002", name="Bread", price=Money.of("3.50"), category="Bakery"),
        Product(product_id="p3", barcode="0003", name="Apples", price=Money.of("4.25")),
    ]


def default_carts() -> list[Cart]:
    return [
        Cart(cart_id="CART_001", status=CartStatus.IN_USE),
        Cart(cart_id="CART_002", status=CartStatus.AVAILABLE),
        Cart(cart_id="CART_003", status=CartStatus.AVAILABLE),
    ]


@dataclass
class FakeStore:
    carts: FakeCartRepository = field(default_factory=lambda: FakeCartRepository(default_carts()))
    sessions: FakeSessionRepository = field(default_factory=FakeSessionRepository)
    items: FakeSessionItemRepository = field(default_factory=FakeSessionItemRepository)
    products: FakeProductRepository = field(
        default_factory=lambda: FakeProductRepository(default_products())
    )
    orders: FakeOrderRepository = field(default_factory=FakeOrderRepository)
    users: FakeUserRepository = field(default_factory=FakeUserRepository)

    def orchestrator(self) -> SessionOrchestrator:
        return SessionOrchestrator(
            cart_repo=self.carts,
            session_repo=self.sessions,
            item_repo=self.items,
            product_repo=self.products,
            order_repo=self.orders,
            user_repo=self.users,
        )


class FakeRowStore:
    """Stands in for RowStoreClient: tables of dict rows, equality filters only."""

    def __init__(self, tables: dict[str, list[dict]] | None = None) -> None:
        self.tables: dict[str, list[dict]] = {
            name: [dict(r) for r in rows] for name, rows in (tables or {}).items()
        }

    def _rows(self, resource: str) -> list[dict]:
        return self.tables.setdefault(resource, [])

    @staticmethod
    def _matches(row: dict, filters) -> bool:
        return all(str(row.get(k)) == str(v) for k, v in (filters or {}).items())

    def query(self, resource: str, filters=None) -> list[dict]:
        return [dict(r) for r in self._rows(resource) if self._matches(r, filters)]

    def insert(self, resource: str, row: dict) -> None:
        self._rows(resource).append(dict(row))

    def patch(self, resource: str, filters, fields: dict) -> None:
        for row in self._rows(resource):
            if self._matches(row, filters):
                row.update(fields)

    def delete(self, resource: str, filters) -> None:
        self.tables[resource] = [r for r in self._rows(resource) if not self._matches(r, filters)]
