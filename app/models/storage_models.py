from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class UploadPdfRequest(BaseModel):
    """
    Request model for a direct PDF upload.

    The menu kiosk sends only `pdfBase64`; the boarding pass kiosk also sends
    `objectName`.
    """
    pdfBase64: Optional[str] = Field(None, description="The PDF document, base64 encoded.")
    objectName: Optional[str] = Field(None, description="Target object name. Defaults to the menu object.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "pdfBase64": "JVBERi0xLjQKJcfsj6IK...",
                "objectName": "boardpass_current.pdf"
            }
        }
    )

class UploadPdfResponse(BaseModel):
    ok: bool = True
    objectName: str
