"""
Verification Matcher: Decide whether a payment proof corroborates an order.

The adopted policy is price-only: the proof verifies the order when the paid
amount is within a relative tolerance (1% by default) of the order price.
The calendar-day predicate is exposed separately; `evaluate` composes it in
when a stricter policy is configured.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
import logging

from ...config import settings
from ...models import ParsedProof, VerificationStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a verification with the individual predicates."""
    status: VerificationStatus
    price_matches: bool
    same_day: bool


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def price_matches(
    order_price: Any,
    paid_amount: Any,
    tolerance_ratio: Optional[float] = None,
) -> bool:
    """
    True when |order_price - paid_amount| <= tolerance_ratio * order_price.

    Args:
        order_price: Recorded order price
        paid_amount: Amount read from the proof
        tolerance_ratio: Relative tolerance; defaults to settings.price_tolerance_ratio
    """
    if tolerance_ratio is None:
        tolerance_ratio = settings.price_tolerance_ratio
    order_price = _to_decimal(order_price)
    paid_amount = _to_decimal(paid_amount)
    tolerance = _to_decimal(tolerance_ratio) * order_price
    return abs(order_price - paid_amount) <= tolerance


def same_calendar_day(first: Optional[datetime], second: Optional[datetime]) -> bool:
    """True when both datetimes are present and fall on the same calendar day."""
    if first is None or second is None:
        return False
    return first.date() == second.date()


def match(order: Any, proof: ParsedProof, tolerance_ratio: Optional[float] = None) -> VerificationStatus:
    """
    Price-only verification.

    Args:
        order: Anything with a `price` attribute (Order, OrderReference)
        proof: Extracted payment proof

    Returns:
        VerificationStatus.VERIFIED or VerificationStatus.MISMATCH
    """
    if price_matches(order.price, proof.total_payment, tolerance_ratio):
        return VerificationStatus.VERIFIED
    return VerificationStatus.MISMATCH


def evaluate(
    order: Any,
    proof: ParsedProof,
    tolerance_ratio: Optional[float] = None,
    require_same_day: Optional[bool] = None,
) -> VerificationResult:
    """
    Verification with both predicates reported.

    With require_same_day (default: settings.verify_require_same_day) the proof
    must also be dated on the order's calendar day.
    """
    if require_same_day is None:
        require_same_day = settings.verify_require_same_day

    status = match(order, proof, tolerance_ratio)
    price_ok = status is VerificationStatus.VERIFIED
    same_day = same_calendar_day(getattr(order, "date_time", None), proof.date_time)

    if require_same_day and not same_day:
        status = VerificationStatus.MISMATCH

    logger.info(
        f"Verification: order_price={order.price}, paid={proof.total_payment}, "
        f"price_matches={price_ok}, same_day={same_day}, status={status.value}"
    )
    return VerificationResult(status=status, price_matches=price_ok, same_day=same_day)
