from typing import List, Optional, Protocol
from app.core.logging import get_logger

logger = get_logger("storage-services")

PDF_CONTENT_TYPE = "application/pdf"

MENU_OBJECT = "menu_current.pdf"
BOARDPASS_OBJECT = "boardpass_current.pdf"
# Older boarding pass kiosks still upload under this name.
LEGACY_BOARDING_OBJECT = "boarding_current.pdf"

ALLOWED_OBJECTS = (MENU_OBJECT, BOARDPASS_OBJECT, LEGACY_BOARDING_OBJECT)


class BlobStore(Protocol):
    def put(self, key: str, data: bytes, content_type: str = ...) -> None:
        ...

    def get(self, key: str) -> bytes:
        ...


def resolve_object_name(object_name: Optional[str]) -> str:
    """Falls back to the menu object when no name is given, then trims whitespace."""
    return (object_name or MENU_OBJECT).strip()


def is_allowed_object(object_name: str) -> bool:
    return object_name in ALLOWED_OBJECTS


def allowed_objects() -> List[str]:
    return list(ALLOWED_OBJECTS)


def upload_pdf_data(store: BlobStore, object_name: str, pdf_bytes: bytes) -> str:
    """
    Writes the PDF verbatim under an allow-listed name.
    Storage failures propagate as StorageError.
    """
    store.put(object_name, pdf_bytes, content_type=PDF_CONTENT_TYPE)
    logger.info(f"uploadPdfDirect: wrote {object_name} ({len(pdf_bytes)} bytes)")
    return object_name


def get_pdf_data(store: BlobStore, object_name: str) -> bytes:
    pdf_bytes = store.get(object_name)
    logger.info(f"Serving {object_name} ({len(pdf_bytes)} bytes)")
    return pdf_bytes
