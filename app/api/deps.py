from fastapi import Request

from app.services.face_services import FaceDetector
from app.services.storage_services import BlobStore


def get_face_detector(request: Request) -> FaceDetector:
    """The detector built at startup (see the app lifespan)."""
    return request.app.state.face_detector


def get_blob_store(request: Request) -> BlobStore:
    """The blob store built at startup (see the app lifespan)."""
    return request.app.state.blob_store
