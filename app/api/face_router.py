from typing import Optional
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from app.api.deps import get_face_detector
from app.core.errors import DetectionProviderError
from app.core.logging import get_logger
from app.models.face_models import DetectFacesRequest, DetectFacesResponse
from app.models.error_models import ErrorResponse
from app.core.encoding import decode_base64_payload
from app.services.face_services import FaceDetector, detect_faces_data

router = APIRouter()
logger = get_logger("face-endpoints")


@router.post(
    "/detectFaces",
    response_model=DetectFacesResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Detect faces in an image",
)
def detect_faces(
    payload: Optional[DetectFacesRequest] = Body(None),
    detector: FaceDetector = Depends(get_face_detector),
):
    """
    Sends the image to the configured face-detection provider and returns one
    `{x, y, w, h}` rectangle per face, ordered left to right.
    """
    if payload is None or not payload.imageBase64:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "No imageBase64 provided"})

    try:
        image_bytes = decode_base64_payload(payload.imageBase64)
    except ValueError as e:
        logger.warning(f"detectFaces rejected payload: {e}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid imageBase64"})

    try:
        faces = detect_faces_data(image_bytes, detector)
    except DetectionProviderError as e:
        logger.error(f"detectFaces error: {e}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Vision call failed"})
    except Exception as e:
        logger.error(f"An unhandled error occurred in /detectFaces: {e}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Vision call failed"})

    return DetectFacesResponse(faces=faces)
