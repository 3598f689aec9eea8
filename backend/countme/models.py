"""
Pydantic models for extracted records, orders and API request/response schemas.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from .processors.enrichment.payment_types import normalize_payment_type

UNKNOWN_DATE = "Unknown Date"


def _format_date(value: Optional[datetime]) -> str:
    if value is None:
        return UNKNOWN_DATE
    return value.strftime("%d %b %Y %H:%M")


class VerificationStatus(str, Enum):
    """Order verification status."""
    PENDING = "pending"
    VERIFIED = "verified"
    MISMATCH = "mismatch"


class OrderFilter(str, Enum):
    """Order list filter."""
    ALL = "all"
    PENDING = "pending"
    VERIFIED = "verified"
    MISMATCH = "mismatch"


# ==================== Extracted Records ====================

class LineItem(BaseModel):
    """One purchased item on a receipt."""
    name: str
    price: Decimal = Field(default=Decimal("0"), ge=0)


class ParsedReceipt(BaseModel):
    """Structured receipt fields extracted from OCR text."""
    restaurant_name: str = ""
    order_number: str = ""
    date_time: Optional[datetime] = None
    line_items: List[LineItem] = Field(default_factory=list)
    total_price: Decimal = Field(default=Decimal("0"), ge=0)
    payment_method: str = ""
    raw_text: str = ""

    @computed_field
    @property
    def calculated_total(self) -> Decimal:
        """Sum of line item prices; may differ from total_price."""
        return sum((item.price for item in self.line_items), Decimal("0"))

    @computed_field
    @property
    def payment_type(self) -> str:
        """Payment method normalized to a category."""
        return normalize_payment_type(self.payment_method)

    @property
    def main_item(self) -> Optional[LineItem]:
        return self.line_items[0] if self.line_items else None

    @property
    def side_items(self) -> List[LineItem]:
        return self.line_items[1:]

    @property
    def formatted_date(self) -> str:
        return _format_date(self.date_time)

    class Config:
        json_schema_extra = {
            "example": {
                "restaurant_name": "Mama Djempol Binong",
                "order_number": "POS-170325-99",
                "date_time": "2025-03-17T13:27:00",
                "line_items": [
                    {"name": "Daging Sapi lada Hitam", "price": "16000"},
                    {"name": "Kentang Mustopa", "price": "5000"},
                    {"name": "Nasi Putih", "price": "4000"}
                ],
                "total_price": "25000",
                "payment_method": "Qris Mandiri",
                "raw_text": "Mama Djempol Binong\n..."
            }
        }


class ParsedProof(BaseModel):
    """Structured payment proof fields extracted from OCR text."""
    date_time: Optional[datetime] = None
    total_payment: Decimal = Field(default=Decimal("0"), ge=0)
    bank_name: Optional[str] = None
    raw_text: str = ""

    @property
    def formatted_date(self) -> str:
        return _format_date(self.date_time)

    class Config:
        json_schema_extra = {
            "example": {
                "date_time": "2025-03-17T13:30:12",
                "total_payment": "25000.00",
                "bank_name": "BCA",
                "raw_text": "Transfer Berhasil\nRp. 25,000.00\n..."
            }
        }


# ==================== Orders ====================

class OrderReference(BaseModel):
    """The fields of an order the verification matcher reads."""
    price: Decimal = Field(ge=0)
    date_time: Optional[datetime] = None


class Order(BaseModel):
    """An order recorded from a receipt, verified later against a payment proof."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    order_number: str = ""
    title: str = ""
    restaurant_name: str = ""
    date_time: datetime
    price: Decimal = Field(ge=0)
    line_items: List[LineItem] = Field(default_factory=list)
    payment_method: str = ""
    verification_status: VerificationStatus = VerificationStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)
    proof: Optional[ParsedProof] = None


# ==================== API Schemas ====================

class BoundingBoxModel(BaseModel):
    """Normalized bounding box, y measured from the top."""
    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class OcrRecordModel(BaseModel):
    """One OCR record as returned by an OCR engine."""
    text: str
    confidence: Optional[float] = None
    bounding_box: Optional[BoundingBoxModel] = None


class DocumentRequest(BaseModel):
    """Extraction request: plain OCR text or OCR records with bounding boxes."""
    text: Optional[str] = None
    records: List[OcrRecordModel] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "records": [
                    {"text": "Total", "confidence": 0.98,
                     "bounding_box": {"x": 0.1, "y": 0.80, "width": 0.2, "height": 0.03}},
                    {"text": "25.000", "confidence": 0.97,
                     "bounding_box": {"x": 0.7, "y": 0.805, "width": 0.2, "height": 0.03}}
                ]
            }
        }


class LayoutResponse(BaseModel):
    """Reading-order reconstruction result."""
    lines: List[str]
    text: str


class VerifyRequest(BaseModel):
    """Verification request: an order reference and an extracted proof."""
    order: OrderReference
    proof: ParsedProof


class VerifyResponse(BaseModel):
    """Verification outcome with the individual predicates."""
    status: VerificationStatus
    price_matches: bool
    same_day: bool


class CreateOrderRequest(BaseModel):
    """Create an order from a (possibly edited) parsed receipt."""
    receipt: ParsedReceipt
