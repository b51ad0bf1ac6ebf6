from typing import Optional
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from app.api.deps import get_blob_store
from app.core.errors import StorageError
from app.core.logging import get_logger
from app.models.error_models import ErrorResponse
from app.models.storage_models import UploadPdfRequest, UploadPdfResponse
from app.core.encoding import decode_base64_payload
from app.services.storage_services import (
    BOARDPASS_OBJECT,
    MENU_OBJECT,
    PDF_CONTENT_TYPE,
    BlobStore,
    allowed_objects,
    get_pdf_data,
    is_allowed_object,
    resolve_object_name,
    upload_pdf_data,
)

router = APIRouter()
logger = get_logger("storage-endpoints")


@router.post(
    "/uploadPdfDirect",
    response_model=UploadPdfResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Upload a kiosk PDF",
)
def upload_pdf_direct(
    payload: Optional[UploadPdfRequest] = Body(None),
    store: BlobStore = Depends(get_blob_store),
):
    """
    Stores a base64 PDF in the bucket.

    - Menu kiosk sends `{pdfBase64}` and it lands in `menu_current.pdf`.
    - BoardPass kiosk sends `{pdfBase64, objectName: "boardpass_current.pdf"}`.
    """
    if payload is None or not payload.pdfBase64:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "No pdfBase64 provided"})

    object_name = resolve_object_name(payload.objectName)
    if not is_allowed_object(object_name):
        logger.warning(f"uploadPdfDirect rejected objectName '{object_name}'")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid objectName", "allowed": allowed_objects()},
        )

    try:
        pdf_bytes = decode_base64_payload(payload.pdfBase64)
    except ValueError as e:
        logger.warning(f"uploadPdfDirect rejected payload: {e}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid pdfBase64"})

    try:
        upload_pdf_data(store, object_name, pdf_bytes)
    except StorageError as e:
        logger.error(f"uploadPdfDirect error: {e}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "upload failed"})

    return UploadPdfResponse(ok=True, objectName=object_name)


def _serve_pdf(store: BlobStore, object_name: str, route_name: str, unavailable_message: str) -> Response:
    try:
        pdf_bytes = get_pdf_data(store, object_name)
    except StorageError as e:
        logger.error(f"{route_name} error: {e}", exc_info=True)
        return PlainTextResponse(unavailable_message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(
        content=pdf_bytes,
        status_code=status.HTTP_200_OK,
        media_type=PDF_CONTENT_TYPE,
        headers={"Cache-Control": "no-store"},
    )


@router.get("/menu_current", response_class=Response, summary="Latest menu PDF")
def menu_current(store: BlobStore = Depends(get_blob_store)):
    return _serve_pdf(store, MENU_OBJECT, "menu_current", "menu not available")


@router.get("/boardpass_current", response_class=Response, summary="Latest boarding pass PDF")
def boardpass_current(store: BlobStore = Depends(get_blob_store)):
    return _serve_pdf(store, BOARDPASS_OBJECT, "boardpass_current", "boardpass not available")


@router.get("/boarding_current", response_class=Response, summary="Latest boarding pass PDF (legacy route)")
def boarding_current(store: BlobStore = Depends(get_blob_store)):
    """Legacy route kept for older kiosks; serves the current boarding pass object."""
    return _serve_pdf(store, BOARDPASS_OBJECT, "boarding_current", "boarding pass not available")
