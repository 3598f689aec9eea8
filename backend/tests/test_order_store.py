"""Tests for the in-memory order store."""
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from countme.models import LineItem, OrderFilter, ParsedProof, ParsedReceipt, VerificationStatus
from countme.services.orders.order_store import OrderStore, order_from_receipt

RECEIPT = ParsedReceipt(
    restaurant_name="Mama Djempol Binong",
    order_number="POS-170325-99",
    date_time=datetime(2025, 3, 17, 13, 27),
    line_items=[
        LineItem(name="Daging Sapi lada Hitam", price=Decimal("16000")),
        LineItem(name="Nasi Putih", price=Decimal("4000")),
    ],
    total_price=Decimal("25000"),
    payment_method="Qris Mandiri",
)


def test_order_from_receipt():
    order = order_from_receipt(RECEIPT)
    assert order.title == "Daging Sapi lada Hitam"
    assert order.price == Decimal("25000")
    assert order.date_time == datetime(2025, 3, 17, 13, 27)
    assert order.verification_status == VerificationStatus.PENDING
    assert order.proof is None


def test_title_falls_back_to_merchant_and_date_to_now():
    now = datetime(2025, 5, 1, 9, 0)
    order = order_from_receipt(ParsedReceipt(restaurant_name="Warung Kopi"), now=now)
    assert order.title == "Warung Kopi"
    assert order.date_time == now


def test_get_and_delete():
    store = OrderStore()
    order = store.create_order_from_receipt(RECEIPT)
    assert store.get_order(order.id) == order

    store.delete_order(order.id)
    with pytest.raises(KeyError):
        store.get_order(order.id)
    with pytest.raises(KeyError):
        store.delete_order(order.id)


def test_list_newest_first_with_filter():
    store = OrderStore()
    first = store.create_order_from_receipt(RECEIPT)
    second = store.create_order_from_receipt(RECEIPT)
    store.attach_proof(first.id, ParsedProof(total_payment=Decimal("25000")), require_same_day=False)

    ids = [o.id for o in store.list_orders()]
    assert set(ids) == {first.id, second.id}
    created = [o.created_at for o in store.list_orders()]
    assert created == sorted(created, reverse=True)

    assert [o.id for o in store.list_orders(OrderFilter.VERIFIED)] == [first.id]
    assert [o.id for o in store.list_orders(OrderFilter.PENDING)] == [second.id]
    assert store.list_orders(OrderFilter.MISMATCH) == []


def test_attach_proof_stores_outcome():
    store = OrderStore()
    order = store.create_order_from_receipt(RECEIPT)
    proof = ParsedProof(total_payment=Decimal("30000"), bank_name="BCA")

    updated = store.attach_proof(order.id, proof, require_same_day=False)

    assert updated.verification_status == VerificationStatus.MISMATCH
    assert updated.proof == proof
    assert store.get_order(order.id).verification_status == VerificationStatus.MISMATCH


def test_attach_proof_unknown_order():
    with pytest.raises(KeyError):
        OrderStore().attach_proof("missing", ParsedProof())
