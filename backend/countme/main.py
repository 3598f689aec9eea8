"""
FastAPI application for CountMe receipt and payment-proof processing.

Run instructions:
1. Install the package:
   pip install -e ".[test]"

2. Copy and configure environment:
   cp backend/.env.example backend/.env
   # Set GOOGLE_APPLICATION_CREDENTIALS for the scan endpoints

3. Run server:
   uvicorn countme.main:app --reload --port 8000 --app-dir backend

Example curl request:
curl -X POST "http://127.0.0.1:8000/api/receipts/scan" \
  -F "file=@/path/to/receipt.jpg"
"""
from fastapi import FastAPI, UploadFile, File, HTTPException, Depends, Response
from fastapi.middleware.cors import CORSMiddleware
from typing import List
import logging

from .config import settings
from .models import (
    CreateOrderRequest,
    DocumentRequest,
    LayoutResponse,
    Order,
    OrderFilter,
    ParsedProof,
    ParsedReceipt,
    VerifyRequest,
    VerifyResponse,
)
from .pipelines.base import DocumentPipeline
from .pipelines.document_pipeline import ProofPipeline, ReceiptPipeline
from .processors.extraction import extract_proof, extract_receipt
from .processors.layout.row_reconstructor import reconstruct_lines
from .processors.verification.matcher import evaluate
from .services.ocr.base import OcrEngine, OcrRecord, OcrResult
from .services.ocr.ocr_normalizer import ocr_result_to_fragments, ocr_result_to_text
from .services.orders.order_store import OrderStore

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="CountMe",
    description="Receipt and payment-proof field extraction with order verification",
    version="0.1.0"
)

# CORS configuration - allow common development ports
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/jpg")

_order_store = OrderStore()


def get_order_store() -> OrderStore:
    return _order_store


def get_ocr_engine() -> OcrEngine:
    """Google Cloud Vision engine; overridden in tests."""
    from .services.ocr.vision_client import VisionOcrEngine
    return VisionOcrEngine()


def _ocr_result_from_request(request: DocumentRequest) -> OcrResult:
    records = [
        OcrRecord.from_dict(record.model_dump())
        for record in request.records
    ]
    return OcrResult(records=records, text=request.text or "")


def _document_text(request: DocumentRequest) -> str:
    if request.records:
        return ocr_result_to_text(_ocr_result_from_request(request))
    return request.text or ""


async def _read_image(file: UploadFile) -> bytes:
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=400,
            detail="Only JPEG/PNG images are supported."
        )

    contents = await file.read()
    if len(contents) == 0:
        raise HTTPException(status_code=400, detail="Empty file.")

    if len(contents) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File size exceeds {settings.max_upload_bytes} bytes."
        )
    return contents


def _scan(contents: bytes, filename: str, engine: OcrEngine, pipeline: DocumentPipeline):
    try:
        ocr_result = engine.recognize(contents)
        logger.info(f"OCR completed for file: {filename}")
    except ValueError as e:
        logger.error(f"OCR not configured: {e}")
        raise HTTPException(status_code=503, detail=f"OCR unavailable: {str(e)}")
    except RuntimeError as e:
        logger.error(f"OCR failed for {filename}: {e}")
        raise HTTPException(status_code=502, detail=f"OCR failed: {str(e)}")

    data = pipeline.execute({"ocr_result": ocr_result})
    return data["record"]


@app.get("/health", tags=["System"])
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


# ==================== Extraction Endpoints ====================

@app.post("/api/layout/reconstruct", response_model=LayoutResponse, tags=["Layout"])
async def reconstruct_layout(request: DocumentRequest):
    """Reconstruct reading-order lines from OCR records."""
    fragments = ocr_result_to_fragments(_ocr_result_from_request(request))
    lines = reconstruct_lines(fragments)
    return LayoutResponse(lines=lines, text="\n".join(lines))


@app.post("/api/receipts/extract", response_model=ParsedReceipt, tags=["Receipts"])
async def extract_receipt_fields(request: DocumentRequest):
    """Extract receipt fields from OCR text or OCR records."""
    return extract_receipt(_document_text(request))


@app.post("/api/proofs/extract", response_model=ParsedProof, tags=["Proofs"])
async def extract_proof_fields(request: DocumentRequest):
    """Extract payment-proof fields from OCR text or OCR records."""
    return extract_proof(_document_text(request))


@app.post("/api/receipts/scan", response_model=ParsedReceipt, tags=["Receipts"])
async def scan_receipt(
    file: UploadFile = File(...),
    engine: OcrEngine = Depends(get_ocr_engine),
):
    """
    OCR a receipt image and extract its fields.

    - Accepts JPEG or PNG images up to MAX_UPLOAD_BYTES
    - Nothing is stored; create the order with POST /api/orders
    """
    contents = await _read_image(file)
    return _scan(contents, file.filename, engine, ReceiptPipeline())


@app.post("/api/proofs/scan", response_model=ParsedProof, tags=["Proofs"])
async def scan_proof(
    file: UploadFile = File(...),
    engine: OcrEngine = Depends(get_ocr_engine),
):
    """OCR a payment-proof image and extract its fields."""
    contents = await _read_image(file)
    return _scan(contents, file.filename, engine, ProofPipeline())


@app.post("/api/verify", response_model=VerifyResponse, tags=["Verification"])
async def verify(request: VerifyRequest):
    """Compare an order reference against an extracted proof."""
    result = evaluate(request.order, request.proof)
    return VerifyResponse(
        status=result.status,
        price_matches=result.price_matches,
        same_day=result.same_day,
    )


# ==================== Order Endpoints ====================

@app.post("/api/orders", response_model=Order, status_code=201, tags=["Orders"])
async def create_order(
    request: CreateOrderRequest,
    store: OrderStore = Depends(get_order_store),
):
    """Create a pending order from an accepted receipt."""
    return store.create_order_from_receipt(request.receipt)


@app.get("/api/orders", response_model=List[Order], tags=["Orders"])
async def list_orders(
    status: OrderFilter = OrderFilter.ALL,
    store: OrderStore = Depends(get_order_store),
):
    """List orders, newest first."""
    return store.list_orders(status)


@app.get("/api/orders/{order_id}", response_model=Order, tags=["Orders"])
async def get_order(order_id: str, store: OrderStore = Depends(get_order_store)):
    try:
        return store.get_order(order_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")


@app.delete("/api/orders/{order_id}", status_code=204, tags=["Orders"])
async def delete_order(order_id: str, store: OrderStore = Depends(get_order_store)):
    try:
        store.delete_order(order_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return Response(status_code=204)


@app.post("/api/orders/{order_id}/proof", response_model=Order, tags=["Orders"])
async def attach_proof(
    order_id: str,
    proof: ParsedProof,
    store: OrderStore = Depends(get_order_store),
):
    """Verify an order against a payment proof and store the outcome."""
    try:
        return store.attach_proof(order_id, proof)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
