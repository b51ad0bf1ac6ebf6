from typing import List, Protocol
from app.models.face_models import RawAnnotation, Rectangle
from app.services.face_normalizer import normalize_annotations
from app.core.logging import get_logger

logger = get_logger("face-services")


class FaceDetector(Protocol):
    def detect(self, image_bytes: bytes) -> List[RawAnnotation]:
        ...


def build_face_detector(settings) -> FaceDetector:
    """Creates the detector named by DETECTION_PROVIDER."""
    if settings.DETECTION_PROVIDER == "rekognition":
        from app.services.aws_services import RekognitionFaceDetector
        logger.info(f"Using AWS Rekognition face detection in {settings.AWS_REGION}.")
        return RekognitionFaceDetector.from_settings(settings)

    from app.services.vision_services import VisionFaceDetector
    logger.info("Using Google Cloud Vision face detection.")
    return VisionFaceDetector.from_settings(settings)


def detect_faces_data(image_bytes: bytes, detector: FaceDetector) -> List[Rectangle]:
    """
    Runs the provider on an image and returns face rectangles ordered left to right.
    Provider failures propagate as DetectionProviderError.
    """
    annotations = detector.detect(image_bytes)
    faces = normalize_annotations(annotations)
    logger.info(f"Returning {len(faces)} face rectangle(s) from {len(annotations)} annotation(s).")
    return faces
