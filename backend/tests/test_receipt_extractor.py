"""Tests for receipt field extraction."""
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from countme.processors.extraction import extract_receipt
from countme.processors.extraction.header_extractor import (
    extract_date,
    extract_order_number,
    extract_restaurant_name,
)
from countme.processors.extraction.item_extractor import (
    ItemNameScanner,
    StopReason,
    clean_item_name,
    extract_line_items,
    find_item_section,
)
from countme.processors.extraction.totals_extractor import extract_payment_method, extract_total

MAMA_DJEMPOL_RECEIPT = """Mama Djempol Binong
Date : 17/03/2025 13:27
Order Number : POS-170325-99
** REPRINT BILL **
Daging Sapi lada
Hitam
1x 16.000 16.000
Kentang Mustopa
1x 5.000 5.000
Nasi Putih
1x 4.000 4.000
Total Item 3
Total 25.000
Tender
Qris Mandiri 25.000
Change 0
"""


def test_end_to_end_receipt():
    receipt = extract_receipt(MAMA_DJEMPOL_RECEIPT)

    assert receipt.restaurant_name == "Mama Djempol Binong"
    assert receipt.order_number == "POS-170325-99"
    assert receipt.date_time == datetime(2025, 3, 17, 13, 27)
    assert receipt.total_price == 25000.0
    assert [(item.name, item.price) for item in receipt.line_items] == [
        ("Daging Sapi lada Hitam", 16000.0),
        ("Kentang Mustopa", 5000.0),
        ("Nasi Putih", 4000.0),
    ]
    assert "Qris Mandiri" in receipt.payment_method
    assert receipt.raw_text == MAMA_DJEMPOL_RECEIPT


def test_receipt_conveniences():
    receipt = extract_receipt(MAMA_DJEMPOL_RECEIPT)

    assert receipt.calculated_total == Decimal("25000")
    assert receipt.main_item.name == "Daging Sapi lada Hitam"
    assert [item.name for item in receipt.side_items] == ["Kentang Mustopa", "Nasi Putih"]
    assert receipt.payment_type == "QRIS"
    assert receipt.formatted_date == "17 Mar 2025 13:27"


def test_idempotent_on_raw_text():
    first = extract_receipt(MAMA_DJEMPOL_RECEIPT)
    second = extract_receipt(first.raw_text)
    assert first.model_dump() == second.model_dump()


def test_oversized_quantity_token_does_not_raise():
    text = "ITEM\nNasi " + "1" * 5000 + "x 5.000 5.000\nTotal 5.000"
    receipt = extract_receipt(text)
    assert [(item.name, item.price) for item in receipt.line_items] == [("Nasi", Decimal("5000"))]
    assert receipt.total_price == Decimal("5000")


def test_empty_and_garbage_text_yield_defaults():
    for text in ("", "   \n\n", "@@@ ### !!!"):
        receipt = extract_receipt(text)
        assert receipt.order_number == ""
        assert receipt.total_price == 0
        assert receipt.payment_method == ""
        assert receipt.formatted_date == "Unknown Date"


class TestHeader:
    def test_multi_line_restaurant_name(self):
        lines = ["Mama Djempol", "Binong", "Date : 17/03/2025"]
        assert extract_restaurant_name(lines) == "Mama Djempol Binong"

    def test_short_order_number_rejected(self):
        assert extract_order_number(["No. 1", "Table 4"]) == ""

    def test_order_number_variants(self):
        assert extract_order_number(["Order No. ABC-123"]) == "ABC-123"
        assert extract_order_number(["No: 000123"]) == "000123"

    def test_indonesian_month_date(self):
        assert extract_date(["Date: 17 Maret 2025"]) == datetime(2025, 3, 17)

    def test_abbreviated_month_with_period(self):
        assert extract_date(["Tgl 17 Mar. 2025"]) == datetime(2025, 3, 17)

    def test_no_date(self):
        assert extract_date(["Nasi Putih", "Total 4.000"]) is None


class TestItems:
    def test_name_prefix_on_quantity_line(self):
        lines = ["ITEM", "Es Teh 2x 3.000 6.000", "Total 6.000"]
        items = extract_line_items(lines)
        assert [(i.name, i.price) for i in items] == [("Es Teh", Decimal("6000"))]

    def test_section_bounds(self):
        lines = ["Shop", "== ==", "A", "1x 1.000", "Sub Total 1.000", "1x 9.000"]
        assert find_item_section(lines) == (2, 4)

    def test_quantity_lines_outside_section_are_ignored(self):
        lines = ["Shop", "QTY", "Kopi", "1x 8.000 8.000", "Total 8.000", "Kembali", "1x 2.000"]
        items = extract_line_items(lines)
        assert [i.name for i in items] == ["Kopi"]

    def test_scanner_stops_at_metadata_line(self):
        lines = ["Cashier : Budi", "Ayam Bakar", "1x 20.000"]
        scanner = ItemNameScanner(lines, lower_bound=0)
        assert scanner.scan(2) == "Ayam Bakar"
        assert scanner.stop_reason is StopReason.METADATA_LINE

    def test_scanner_stops_at_previous_quantity_line(self):
        lines = ["Teh", "1x 3.000", "Kopi", "1x 5.000"]
        scanner = ItemNameScanner(lines, lower_bound=0)
        assert scanner.scan(3) == "Kopi"
        assert scanner.stop_reason is StopReason.QUANTITY_LINE

    def test_scanner_stops_at_section_boundary(self):
        lines = ["Kopi Susu", "1x 5.000"]
        scanner = ItemNameScanner(lines, lower_bound=0)
        assert scanner.scan(1) == "Kopi Susu"
        assert scanner.stop_reason is StopReason.SECTION_BOUNDARY

    def test_clean_item_name(self):
        assert clean_item_name("2  ** Nasi   Goreng **") == "Nasi Goreng"

    def test_nameless_item_is_dropped(self):
        assert extract_line_items(["ITEM", "1x 5.000 5.000", "Total 5.000"]) == []


class TestTotals:
    def test_total_item_is_not_a_total(self):
        assert extract_total(["Total Item 3", "Total 25.000"]) == Decimal("25000")

    def test_total_on_next_line(self):
        assert extract_total(["TOTAL", "25.000"]) == Decimal("25000")

    def test_total_missing(self):
        assert extract_total(["Nasi Putih 4.000"]) == 0

    def test_payment_after_label_skips_change_and_numbers(self):
        lines = ["Total 10.000", "Payment", "10.000", "Change 0", "Cash 10.000"]
        assert extract_payment_method(lines) == "Cash"

    def test_payment_keyword_fallback(self):
        lines = ["Total 10.000", "DEBIT BCA 10.000", "Change 0", "Terima kasih"]
        assert extract_payment_method(lines) == "DEBIT BCA"

    def test_payment_missing(self):
        assert extract_payment_method(["Nasi Putih", "Terima kasih"]) == ""
