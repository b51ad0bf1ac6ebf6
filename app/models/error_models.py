from pydantic import BaseModel
from typing import List, Optional

class ErrorResponse(BaseModel):
    """Error body returned by the relay endpoints: `{"error": "..."}`."""
    error: str
    allowed: Optional[List[str]] = None
