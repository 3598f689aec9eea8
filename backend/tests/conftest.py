"""
Shared pytest fixtures: fresh in-memory order store, fake OCR engine and a
FastAPI TestClient wired to both.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from fastapi.testclient import TestClient

from countme.main import app, get_ocr_engine, get_order_store
from countme.services.ocr.base import OcrEngine, OcrResult
from countme.services.orders.order_store import OrderStore


class StubOcrEngine(OcrEngine):
    """Returns `text` for every image, or raises `error` when set."""

    def __init__(self, text: str = "", error: Exception = None):
        self.text = text
        self.error = error

    def recognize(self, image: bytes) -> OcrResult:
        if self.error is not None:
            raise self.error
        return OcrResult(text=self.text)


@pytest.fixture()
def store():
    return OrderStore()


@pytest.fixture()
def ocr_engine():
    return StubOcrEngine()


@pytest.fixture()
def client(store, ocr_engine):
    app.dependency_overrides[get_order_store] = lambda: store
    app.dependency_overrides[get_ocr_engine] = lambda: ocr_engine
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
