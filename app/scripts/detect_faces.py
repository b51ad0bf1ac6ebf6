"""
Local face detection check

Runs the configured detection provider on an image file and prints the
normalized face rectangles as JSON. With an output path, also writes a copy of
the image with each rectangle outlined in red.

Usage:
    python -m app.scripts.detect_faces <image_path>
    python -m app.scripts.detect_faces <image_path> <annotated_output.png>
"""

import json
import sys
from pathlib import Path
from PIL import Image, ImageDraw
from app.core.config import get_settings
from app.core.errors import DetectionProviderError
from app.core.logging import get_logger
from app.services.face_services import build_face_detector, detect_faces_data

logger = get_logger("detect-faces-script")


def draw_rectangles(image_path: Path, faces, output_path: Path) -> None:
    with Image.open(image_path) as original_image:
        image_with_boxes = original_image.convert("RGB")
    draw = ImageDraw.Draw(image_with_boxes)
    for face in faces:
        draw.rectangle((face.x, face.y, face.x + face.w, face.y + face.h), outline="red", width=3)
    image_with_boxes.save(output_path)
    logger.info(f"Saved {output_path} with {len(faces)} box(es).")


def main():
    if len(sys.argv) not in (2, 3):
        print(__doc__)
        sys.exit(1)

    image_path = Path(sys.argv[1])
    if not image_path.is_file():
        print(f"No such image: {image_path}")
        sys.exit(1)

    detector = build_face_detector(get_settings())
    try:
        faces = detect_faces_data(image_path.read_bytes(), detector)
    except DetectionProviderError as e:
        logger.error(f"Face detection failed: {e}")
        sys.exit(1)

    print(json.dumps({"faces": [face.model_dump() for face in faces]}, indent=2))

    if len(sys.argv) == 3:
        draw_rectangles(image_path, faces, Path(sys.argv[2]))


if __name__ == "__main__":
    main()
