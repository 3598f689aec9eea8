"""
Order Store: In-memory order collaborator.

Creates pending orders from accepted receipts and verifies them when a payment
proof is attached. Extraction never writes here; only records the caller has
accepted are stored.
"""
from datetime import datetime
from threading import Lock
from typing import Dict, List, Optional
import logging

from ...models import Order, OrderFilter, ParsedProof, ParsedReceipt, VerificationStatus
from ...processors.verification.matcher import evaluate

logger = logging.getLogger(__name__)


def order_from_receipt(receipt: ParsedReceipt, now: Optional[datetime] = None) -> Order:
    """
    Build a pending order from a parsed (possibly hand-edited) receipt.

    The title is the main item's name, falling back to the merchant name.
    A missing receipt date defaults to now.
    """
    now = now or datetime.now()
    main_item = receipt.main_item
    title = main_item.name if main_item else receipt.restaurant_name
    return Order(
        order_number=receipt.order_number,
        title=title,
        restaurant_name=receipt.restaurant_name,
        date_time=receipt.date_time or now,
        price=receipt.total_price,
        line_items=list(receipt.line_items),
        payment_method=receipt.payment_method,
        verification_status=VerificationStatus.PENDING,
        created_at=now,
    )


class OrderStore:
    """Thread-safe in-memory order store."""

    def __init__(self):
        self._orders: Dict[str, Order] = {}
        self._lock = Lock()

    def create_order_from_receipt(self, receipt: ParsedReceipt) -> Order:
        order = order_from_receipt(receipt)
        with self._lock:
            self._orders[order.id] = order
        logger.info(f"Created order {order.id} ({order.title!r}, price={order.price})")
        return order

    def get_order(self, order_id: str) -> Order:
        """
        Raises:
            KeyError: If the order does not exist
        """
        with self._lock:
            if order_id not in self._orders:
                raise KeyError(order_id)
            return self._orders[order_id]

    def list_orders(self, status_filter: OrderFilter = OrderFilter.ALL) -> List[Order]:
        """Orders matching the filter, newest first."""
        status_filter = OrderFilter(status_filter)
        with self._lock:
            orders = list(self._orders.values())
        if status_filter != OrderFilter.ALL:
            orders = [o for o in orders if o.verification_status.value == status_filter.value]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def delete_order(self, order_id: str) -> None:
        """
        Raises:
            KeyError: If the order does not exist
        """
        with self._lock:
            del self._orders[order_id]
        logger.info(f"Deleted order {order_id}")

    def attach_proof(
        self,
        order_id: str,
        proof: ParsedProof,
        require_same_day: Optional[bool] = None,
    ) -> Order:
        """
        Verify an order against a payment proof and store the outcome.

        Returns:
            The updated order (status verified or mismatch)

        Raises:
            KeyError: If the order does not exist
        """
        with self._lock:
            order = self._orders[order_id]
            result = evaluate(order, proof, require_same_day=require_same_day)
            updated = order.model_copy(update={
                "verification_status": result.status,
                "proof": proof,
            })
            self._orders[order_id] = updated
        logger.info(f"Order {order_id} verification: {result.status.value}")
        return updated
