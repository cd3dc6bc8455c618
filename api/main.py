"""
FastAPI API for Document Verifier
"""
import base64
import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import UploadFile

from docverify import (
    DocumentVerifier,
    UnsupportedDocumentType,
    VerificationFailedError,
)
from docverify.exceptions import PreviewRenderingError
from docverify.preview import PreviewRenderer
from docverify.settings import Settings

settings = Settings.from_env()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Document Verifier API",
    description="API for verifying claimed facts against sale, gift, rental and authority documents",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Form fields that are not part of the claim
RESERVED_FIELDS = {"document", "docType"}

# Initialized lazily (singletons)
verifier: Optional[DocumentVerifier] = None
renderer: Optional[PreviewRenderer] = None


def get_verifier() -> DocumentVerifier:
    """Get or create verifier instance"""
    global verifier
    if verifier is None:
        try:
            verifier = DocumentVerifier.from_settings(settings)
        except ValueError as e:
            logger.error("Verifier is not configured: %s", e)
            raise failure(500, "Verifier is not configured.", str(e))
    return verifier


def get_renderer() -> PreviewRenderer:
    """Get or create preview renderer instance"""
    global renderer
    if renderer is None:
        renderer = PreviewRenderer(dpi=settings.PREVIEW_DPI)
    return renderer


def failure(status_code: int, error: str, details: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": error, "details": details})


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Document Verifier API",
        "version": "1.0.0",
        "endpoints": {
            "POST /api/verify-document": "Verify a PDF (multipart: document, docType, claimed fields)",
            "GET /health": "Health check"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "model": settings.MODEL,
        "api_key_configured": bool(settings.OPENAI_API_KEY),
    }


@app.post("/api/verify-document", response_model=Dict[str, Any])
async def verify_document(
    request: Request,
    doc_verifier: DocumentVerifier = Depends(get_verifier),
    preview_renderer: PreviewRenderer = Depends(get_renderer),
):
    """
    Verify an uploaded PDF against the claimed field values.

    Multipart form fields:
    - ``document``: the PDF file
    - ``docType``: sale, gift, rental or authority
    - every other field is treated as a claimed value (e.g. ``tenantName``)

    The response carries the verdict, the comparison table, per-page
    summaries, the narrative analysis, a verification id and base64 PNG
    previews of every page. ``docType`` is echoed in its canonical form,
    so the legacy ``sales`` comes back as ``sale``.
    """
    form = await request.form()
    upload = form.get("document")
    if not isinstance(upload, UploadFile):
        raise HTTPException(status_code=400, detail={"error": "No document uploaded."})

    doc_type = form.get("docType")
    claim = {
        key: value for key, value in form.items()
        if key not in RESERVED_FIELDS and isinstance(value, str)
    }

    verification_id = str(uuid.uuid4())
    logger.info("Starting verification process with ID: %s", verification_id)

    try:
        doc_verifier.registry.resolve(doc_type)

        document_bytes = await upload.read()

        images = await run_in_threadpool(preview_renderer.render_preview_images, document_bytes)
        if not images:
            raise PreviewRenderingError("PDF to image conversion failed. Check 'poppler' installation.")

        result = await run_in_threadpool(doc_verifier.verify, document_bytes, doc_type, claim)
    except UnsupportedDocumentType as e:
        raise failure(400, "Unsupported document type.", str(e))
    except (PreviewRenderingError, VerificationFailedError) as e:
        logger.error("Error verifying document %s: %s", verification_id, e)
        raise failure(500, "Failed to verify document.", str(e))
    finally:
        await upload.close()

    return {
        **result.to_dict(),
        "verificationId": verification_id,
        "images": [base64.b64encode(image).decode("ascii") for image in images],
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
