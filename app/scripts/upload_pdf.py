"""
Kiosk PDF upload

Pushes a local PDF to a running relay through /uploadPdfDirect, the same way
the kiosks do.

Usage:
    python -m app.scripts.upload_pdf <pdf_path>
    python -m app.scripts.upload_pdf <pdf_path> <object_name>

The relay base URL is read from RELAY_URL (default http://localhost:8080).
"""

import base64
import os
import sys
from pathlib import Path
from typing import Optional
import httpx
from app.core.logging import get_logger

logger = get_logger("upload-pdf-script")

RELAY_URL = os.getenv("RELAY_URL", "http://localhost:8080")


def upload_pdf(pdf_path: Path, object_name: Optional[str] = None, relay_url: str = RELAY_URL) -> dict:
    payload = {"pdfBase64": base64.b64encode(pdf_path.read_bytes()).decode("ascii")}
    if object_name:
        payload["objectName"] = object_name

    with httpx.Client(timeout=120.0) as client:
        response = client.post(f"{relay_url.rstrip('/')}/uploadPdfDirect", json=payload)
    if response.status_code != 200:
        logger.error(f"HTTP {response.status_code} uploading {pdf_path}: {response.text}")
        response.raise_for_status()
    return response.json()


def main():
    if len(sys.argv) not in (2, 3):
        print(__doc__)
        sys.exit(1)

    pdf_path = Path(sys.argv[1])
    if not pdf_path.is_file():
        print(f"No such file: {pdf_path}")
        sys.exit(1)

    object_name = sys.argv[2] if len(sys.argv) == 3 else None
    try:
        result = upload_pdf(pdf_path, object_name)
    except httpx.HTTPError as e:
        logger.error(f"Upload failed: {e}")
        sys.exit(1)
    print(f"Uploaded {pdf_path} as {result.get('objectName')}")


if __name__ == "__main__":
    main()
