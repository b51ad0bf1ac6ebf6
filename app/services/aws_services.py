import boto3
import io
from PIL import Image, UnidentifiedImageError
from botocore.exceptions import BotoCoreError, ClientError
from typing import Any, Dict, List, Optional
from app.models.face_models import RawAnnotation, RawVertex
from app.core.errors import DetectionProviderError, ObjectNotFoundError, StorageError
from app.core.logging import get_logger

logger = get_logger("aws-services")

NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _error_message(e: Exception) -> str:
    if isinstance(e, ClientError):
        return e.response.get("Error", {}).get("Message", str(e))
    return str(e)


def _scale(ratio: Optional[float], size: int) -> Optional[int]:
    if ratio is None:
        return None
    return int(ratio * size)


def bounding_box_to_vertices(bbox: Dict[str, Any], image_width: int, image_height: int) -> List[RawVertex]:
    """
    Converts a Rekognition ratio bounding box into a four-corner pixel polygon.

    Order is top-left, top-right, bottom-right, bottom-left. If a ratio is
    missing the matching coordinates are left empty:
    - left = Left * image_width
    - top = Top * image_height
    - right = (Left + Width) * image_width
    - bottom = (Top + Height) * image_height
    """
    left_ratio = bbox.get("Left")
    top_ratio = bbox.get("Top")
    width_ratio = bbox.get("Width")
    height_ratio = bbox.get("Height")

    left = _scale(left_ratio, image_width)
    top = _scale(top_ratio, image_height)
    right = _scale(left_ratio + width_ratio, image_width) if left_ratio is not None and width_ratio is not None else None
    bottom = _scale(top_ratio + height_ratio, image_height) if top_ratio is not None and height_ratio is not None else None

    return [
        RawVertex(x=left, y=top),
        RawVertex(x=right, y=top),
        RawVertex(x=right, y=bottom),
        RawVertex(x=left, y=bottom),
    ]


class RekognitionFaceDetector:
    """Face detector backed by AWS Rekognition `DetectFaces`."""

    def __init__(self, client):
        self.client = client

    @classmethod
    def from_settings(cls, settings) -> "RekognitionFaceDetector":
        return cls(boto3.client("rekognition", region_name=settings.AWS_REGION))

    def detect(self, image_bytes: bytes) -> List[RawAnnotation]:
        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                image_width, image_height = img.size
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise DetectionProviderError(f"Could not read image dimensions: {e}") from e

        try:
            response = self.client.detect_faces(
                Image={'Bytes': image_bytes},
                Attributes=['DEFAULT']
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Rekognition DetectFaces failed: {_error_message(e)}")
            raise DetectionProviderError(_error_message(e)) from e

        face_details = response.get("FaceDetails") or []
        logger.info(f"Rekognition detected {len(face_details)} face(s) in a {image_width}x{image_height} image.")
        return [
            RawAnnotation(vertices=bounding_box_to_vertices(face.get("BoundingBox") or {}, image_width, image_height))
            for face in face_details
        ]


class S3BlobStore:
    """Key/value blob store over a single S3 bucket."""

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings) -> "S3BlobStore":
        return cls(boto3.client("s3", region_name=settings.AWS_REGION), settings.S3_BUCKET_NAME)

    def put(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to write s3://{self.bucket}/{key}: {_error_message(e)}", exc_info=True)
            raise StorageError(_error_message(e)) from e

    def get(self, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in NOT_FOUND_CODES:
                logger.warning(f"s3://{self.bucket}/{key} does not exist.")
                raise ObjectNotFoundError(key) from e
            logger.error(f"Failed to read s3://{self.bucket}/{key}: {_error_message(e)}", exc_info=True)
            raise StorageError(_error_message(e)) from e
        except BotoCoreError as e:
            logger.error(f"Failed to read s3://{self.bucket}/{key}: {e}", exc_info=True)
            raise StorageError(str(e)) from e
