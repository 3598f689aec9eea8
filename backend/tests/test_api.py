"""HTTP surface tests using FastAPI TestClient."""
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from countme.config import settings

RECEIPT_TEXT = (
    "Mama Djempol Binong\nDate : 17/03/2025 13:27\nOrder Number : POS-170325-99\n"
    "** REPRINT BILL **\nNasi Putih\n1x 25.000 25.000\nTotal Item 1\nTotal 25.000\n"
    "Tender\nQris Mandiri 25.000\nChange 0"
)
PROOF_TEXT = "Transfer Berhasil\n17 Mar 2025 13:30:12\nRp. 25,000.00\nBCA"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_layout_reconstruct(client):
    records = [
        {"text": "25.000", "confidence": 0.9, "bounding_box": {"x": 0.6, "y": 0.08, "width": 0.2, "height": 0.04}},
        {"text": "Total", "confidence": 0.9, "bounding_box": {"x": 0.1, "y": 0.09, "width": 0.2, "height": 0.04}},
        {"text": "Tender", "confidence": 0.9, "bounding_box": {"x": 0.0, "y": 0.48, "width": 0.2, "height": 0.04}},
    ]
    response = client.post("/api/layout/reconstruct", json={"records": records})
    assert response.status_code == 200
    assert response.json() == {"lines": ["Total 25.000", "Tender"], "text": "Total 25.000\nTender"}


def test_extract_receipt_from_text(client):
    response = client.post("/api/receipts/extract", json={"text": RECEIPT_TEXT})
    assert response.status_code == 200
    body = response.json()
    assert body["order_number"] == "POS-170325-99"
    assert Decimal(body["total_price"]) == 25000
    assert body["line_items"][0]["name"] == "Nasi Putih"
    assert body["payment_type"] == "QRIS"


def test_extract_proof_from_text(client):
    response = client.post("/api/proofs/extract", json={"text": PROOF_TEXT})
    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["total_payment"]) == 25000
    assert body["bank_name"] == "BCA"


def test_verify(client):
    payload = {
        "order": {"price": 25000},
        "proof": {"total_payment": 25200},
    }
    body = client.post("/api/verify", json=payload).json()
    assert body["status"] == "verified"
    assert body["price_matches"] is True

    payload["proof"]["total_payment"] = 25300
    assert client.post("/api/verify", json=payload).json()["status"] == "mismatch"


def test_verify_rejects_negative_amount(client):
    payload = {"order": {"price": 25000}, "proof": {"total_payment": -1}}
    assert client.post("/api/verify", json=payload).status_code == 422


class TestScan:
    def test_scan_receipt(self, client, ocr_engine):
        ocr_engine.text = RECEIPT_TEXT
        files = {"file": ("receipt.jpg", b"\xff\xd8fake", "image/jpeg")}
        response = client.post("/api/receipts/scan", files=files)
        assert response.status_code == 200
        assert response.json()["restaurant_name"] == "Mama Djempol Binong"

    def test_scan_proof(self, client, ocr_engine):
        ocr_engine.text = PROOF_TEXT
        files = {"file": ("proof.png", b"\x89PNGfake", "image/png")}
        response = client.post("/api/proofs/scan", files=files)
        assert response.status_code == 200
        assert response.json()["bank_name"] == "BCA"

    def test_rejects_non_images(self, client):
        files = {"file": ("notes.txt", b"hello", "text/plain")}
        assert client.post("/api/receipts/scan", files=files).status_code == 400

    def test_rejects_empty_file(self, client):
        files = {"file": ("receipt.jpg", b"", "image/jpeg")}
        assert client.post("/api/receipts/scan", files=files).status_code == 400

    def test_rejects_oversized_file(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_bytes", 4)
        files = {"file": ("receipt.jpg", b"12345", "image/jpeg")}
        assert client.post("/api/receipts/scan", files=files).status_code == 413

    def test_ocr_not_configured(self, client, ocr_engine):
        ocr_engine.error = ValueError("GOOGLE_APPLICATION_CREDENTIALS environment variable must be set")
        files = {"file": ("receipt.jpg", b"img", "image/jpeg")}
        assert client.post("/api/receipts/scan", files=files).status_code == 503

    def test_ocr_api_error(self, client, ocr_engine):
        ocr_engine.error = RuntimeError("Vision API error: quota")
        files = {"file": ("receipt.jpg", b"img", "image/jpeg")}
        assert client.post("/api/proofs/scan", files=files).status_code == 502


class TestOrders:
    def _create(self, client):
        receipt = client.post("/api/receipts/extract", json={"text": RECEIPT_TEXT}).json()
        response = client.post("/api/orders", json={"receipt": receipt})
        assert response.status_code == 201
        return response.json()

    def test_create_and_get(self, client):
        order = self._create(client)
        assert order["title"] == "Nasi Putih"
        assert order["verification_status"] == "pending"

        fetched = client.get(f"/api/orders/{order['id']}").json()
        assert fetched["id"] == order["id"]

    def test_list_with_filter(self, client):
        order = self._create(client)
        assert [o["id"] for o in client.get("/api/orders").json()] == [order["id"]]
        assert client.get("/api/orders", params={"status": "verified"}).json() == []
        assert client.get("/api/orders", params={"status": "bogus"}).status_code == 422

    def test_attach_proof(self, client):
        order = self._create(client)
        proof = client.post("/api/proofs/extract", json={"text": PROOF_TEXT}).json()

        response = client.post(f"/api/orders/{order['id']}/proof", json=proof)
        assert response.status_code == 200
        body = response.json()
        assert body["verification_status"] == "verified"
        assert body["proof"]["bank_name"] == "BCA"

        verified = client.get("/api/orders", params={"status": "verified"}).json()
        assert [o["id"] for o in verified] == [order["id"]]

    def test_delete(self, client):
        order = self._create(client)
        assert client.delete(f"/api/orders/{order['id']}").status_code == 204
        assert client.get(f"/api/orders/{order['id']}").status_code == 404

    def test_unknown_order(self, client):
        assert client.get("/api/orders/missing").status_code == 404
        assert client.delete("/api/orders/missing").status_code == 404
        assert client.post("/api/orders/missing/proof", json={"total_payment": 1}).status_code == 404
