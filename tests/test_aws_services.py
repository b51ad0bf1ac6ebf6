import io

import boto3
import pytest
from botocore.response import StreamingBody
from botocore.stub import Stubber
from PIL import Image

from app.core.errors import DetectionProviderError, ObjectNotFoundError, StorageError
from app.services.aws_services import RekognitionFaceDetector, S3BlobStore, bounding_box_to_vertices
from app.services.face_normalizer import normalize_annotations

BUCKET = "test-bucket"


def _client(service):
    return boto3.client(
        service,
        region_name="us-east-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def _png(width, height):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), "white").save(buf, format="PNG")
    return buf.getvalue()


def test_bounding_box_to_vertices_scales_ratios():
    vertices = bounding_box_to_vertices({"Left": 0.1, "Top": 0.25, "Width": 0.5, "Height": 0.5}, 200, 100)
    assert [(v.x, v.y) for v in vertices] == [(20, 25), (120, 25), (120, 75), (20, 75)]


def test_bounding_box_missing_ratios_leaves_coordinates_empty():
    vertices = bounding_box_to_vertices({"Left": 0.1, "Width": 0.2}, 100, 100)
    assert all(v.y is None for v in vertices)
    assert {v.x for v in vertices} == {10, 30}


def test_rekognition_detector_returns_pixel_polygons():
    client = _client("rekognition")
    image = _png(400, 200)
    with Stubber(client) as stubber:
        stubber.add_response(
            "detect_faces",
            {
                "FaceDetails": [
                    {"BoundingBox": {"Left": 0.5, "Top": 0.25, "Width": 0.25, "Height": 0.5}},
                    {"BoundingBox": {"Left": 0.0, "Top": 0.5, "Width": 0.125, "Height": 0.25}},
                    {"BoundingBox": {"Width": 0.1, "Height": 0.1}},
                ]
            },
            {"Image": {"Bytes": image}, "Attributes": ["DEFAULT"]},
        )
        annotations = RekognitionFaceDetector(client).detect(image)

    assert len(annotations) == 3
    faces = normalize_annotations(annotations)
    assert [f.model_dump() for f in faces] == [
        {"x": 0, "y": 100, "w": 50, "h": 50},
        {"x": 200, "y": 50, "w": 100, "h": 100},
    ]


def test_rekognition_client_error_becomes_provider_error():
    client = _client("rekognition")
    image = _png(10, 10)
    with Stubber(client) as stubber:
        stubber.add_client_error("detect_faces", service_error_code="ThrottlingException", service_message="slow down")
        with pytest.raises(DetectionProviderError):
            RekognitionFaceDetector(client).detect(image)


def test_rekognition_rejects_unreadable_image():
    with pytest.raises(DetectionProviderError):
        RekognitionFaceDetector(_client("rekognition")).detect(b"not an image")


def test_s3_put_writes_object():
    client = _client("s3")
    with Stubber(client) as stubber:
        stubber.add_response(
            "put_object",
            {},
            {"Bucket": BUCKET, "Key": "menu_current.pdf", "Body": b"%PDF", "ContentType": "application/pdf"},
        )
        S3BlobStore(client, BUCKET).put("menu_current.pdf", b"%PDF", content_type="application/pdf")
        stubber.assert_no_pending_responses()


def test_s3_put_failure_raises_storage_error():
    client = _client("s3")
    with Stubber(client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(StorageError):
            S3BlobStore(client, BUCKET).put("menu_current.pdf", b"%PDF")


def test_s3_get_returns_bytes():
    client = _client("s3")
    data = b"%PDF-1.4 body"
    with Stubber(client) as stubber:
        stubber.add_response(
            "get_object",
            {"Body": StreamingBody(io.BytesIO(data), len(data))},
            {"Bucket": BUCKET, "Key": "boardpass_current.pdf"},
        )
        assert S3BlobStore(client, BUCKET).get("boardpass_current.pdf") == data


def test_s3_get_missing_key_raises_not_found():
    client = _client("s3")
    with Stubber(client) as stubber:
        stubber.add_client_error("get_object", service_error_code="NoSuchKey", http_status_code=404)
        with pytest.raises(ObjectNotFoundError) as exc_info:
            S3BlobStore(client, BUCKET).get("menu_current.pdf")
    assert exc_info.value.key == "menu_current.pdf"


def test_s3_get_other_error_raises_storage_error():
    client = _client("s3")
    with Stubber(client) as stubber:
        stubber.add_client_error("get_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(StorageError) as exc_info:
            S3BlobStore(client, BUCKET).get("menu_current.pdf")
    assert not isinstance(exc_info.value, ObjectNotFoundError)


def test_rekognition_rejects_decompression_bomb(oversized_png):
    client = _client("rekognition")
    with Stubber(client) as stubber:
        with pytest.raises(DetectionProviderError, match="Could not read image dimensions") as exc_info:
            RekognitionFaceDetector(client).detect(oversized_png)
        stubber.assert_no_pending_responses()
    assert isinstance(exc_info.value.__cause__, Image.DecompressionBombError)
