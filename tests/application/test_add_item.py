"""Integration tests for the AddItem use case."""

from smartcart.domain.exceptions import ErrorKind
from smartcart.domain.model.session import SessionItem
from smartcart.domain.model.value_objects import Money
from tests.fakes import FakeStore


def _started():
    store = FakeStore()
    orchestrator = store.orchestrator()
    session = orchestrator.start_session("CART_002", "u1").unwrap()
    return store, orchestrator, session


class TestAddItemHappyPath:

    def test_first_scan_creates_item(self):
        store, orchestrator, session = _started()

        item = orchestrator.add_item("0001").unwrap()

        assert item.quantity.value == 1
        assert item.total_price == Money.of("10.00")
        assert [i.item_id for i in orchestrator.state.items.value] == [item.item_id]

    def test_repeat_scan_merges_into_one_row(self):
        store, orchestrator, session = _started()

        orchestrator.add_item("0001")
        item = orchestrator.add_item("0001").unwrap()

        rows = store.items.list_for_session(session.session_id)
        assert len(rows) == 1
        assert rows[0].quantity.value == 2
        assert rows[0].total_price == Money.of("20.00")
        assert item.item_id == rows[0].item_id

    def test_different_products_get_separate_rows(self):
        store, orchestrator, session = _started()
        orchestrator.add_item("0001")
        orchestrator.add_item("0002")
        assert len(orchestrator.state.items.value) == 2

    def test_accepts_matching_session_id(self):
        _, orchestrator, session = _started()
        assert orchestrator.add_item("0001", session.session_id).ok

    def test_republishes_rows_written_by_others(self):
        store, orchestrator, session = _started()
        bread = store.products.get_by_barcode("0002")
        store.items.insert_external(SessionItem.first_scan(session.session_id, bread, "staff"))

        orchestrator.add_item("0001")

        barcodes = sorted(i.barcode for i in orchestrator.state.items.value)
        assert barcodes == ["0001", "0002"]

    def test_subscriber_sees_each_change(self):
        _, orchestrator, _ = _started()
        seen = []
        orchestrator.state.items.subscribe(lambda items: seen.append(len(items)))

        orchestrator.add_item("0001")
        orchestrator.add_item("0002")

        assert seen == [0, 1, 2]


class TestAddItemValidation:

    def test_unknown_product(self):
        store, orchestrator, session = _started()
        result = orchestrator.add_item("9999")
        assert result.kind == ErrorKind.PRODUCT_NOT_FOUND
        assert store.items.list_for_session(session.session_id) == []

    def test_blank_code(self):
        _, orchestrator, _ = _started()
        assert orchestrator.add_item("  ").kind == ErrorKind.VALIDATION

    def test_requires_active_session(self):
        orchestrator = FakeStore().orchestrator()
        assert orchestrator.add_item("0001").kind == ErrorKind.NO_ACTIVE_SESSION

    def test_rejects_foreign_session_id(self):
        _, orchestrator, _ = _started()
        result = orchestrator.add_item("0001", "not-my-session")
        assert result.kind == ErrorKind.NO_ACTIVE_SESSION
