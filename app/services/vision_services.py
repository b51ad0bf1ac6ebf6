from typing import Callable, List, Optional
from google.api_core.exceptions import GoogleAPICallError, RetryError
from google.auth.exceptions import GoogleAuthError
from google.cloud import vision
from google.oauth2 import service_account
from app.models.face_models import RawAnnotation, RawVertex
from app.core.errors import DetectionProviderError
from app.core.logging import get_logger

logger = get_logger("vision-services")


def build_vision_client(settings) -> vision.ImageAnnotatorClient:
    """
    Builds a Google Cloud Vision client.

    Uses the service account file in GOOGLE_SA_JSON when set, otherwise
    Application Default Credentials (e.g. the Cloud Run service identity).
    """
    if settings.GOOGLE_SA_JSON:
        creds = service_account.Credentials.from_service_account_file(settings.GOOGLE_SA_JSON)
        return vision.ImageAnnotatorClient(credentials=creds)
    return vision.ImageAnnotatorClient()


class VisionFaceDetector:
    """
    Face detector backed by Google Cloud Vision `face_detection`.

    When given a `client_factory` instead of a client, the client is built on
    the first detection, so missing credentials surface as a failed call rather
    than a failed startup.
    """

    def __init__(self, client=None, client_factory: Optional[Callable[[], vision.ImageAnnotatorClient]] = None):
        if client is None and client_factory is None:
            raise ValueError("VisionFaceDetector needs a client or a client_factory")
        self._client = client
        self._client_factory = client_factory

    @classmethod
    def from_settings(cls, settings) -> "VisionFaceDetector":
        return cls(client_factory=lambda: build_vision_client(settings))

    @property
    def client(self):
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def detect(self, image_bytes: bytes) -> List[RawAnnotation]:
        try:
            response = self.client.face_detection(image=vision.Image(content=image_bytes))
        except (GoogleAPICallError, RetryError, GoogleAuthError, OSError) as e:
            logger.error(f"Vision face_detection call failed: {e}")
            raise DetectionProviderError(str(e)) from e

        if response.error and response.error.message:
            logger.error(f"Vision error: {response.error.message}")
            raise DetectionProviderError(response.error.message)

        annotations = [
            RawAnnotation(vertices=[RawVertex(x=v.x, y=v.y) for v in face.bounding_poly.vertices])
            for face in response.face_annotations
        ]
        logger.info(f"Vision detected {len(annotations)} face(s).")
        return annotations
