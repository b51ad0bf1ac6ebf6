from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from typing import List, Optional, Union

# JSON numbers only; booleans and numeric strings are not coordinates.
Coordinate = Union[StrictInt, StrictFloat]

class RawVertex(BaseModel):
    """
    One polygon vertex as reported by the detection provider.
    Either coordinate may be missing.
    """
    x: Optional[Coordinate] = None
    y: Optional[Coordinate] = None

class RawAnnotation(BaseModel):
    """A single face detection: the provider's bounding polygon."""
    vertices: List[RawVertex] = Field(default_factory=list)

class Rectangle(BaseModel):
    """Axis-aligned face box in image pixel space, top-left origin."""
    model_config = ConfigDict(frozen=True)

    x: Coordinate
    y: Coordinate
    w: Coordinate
    h: Coordinate

class DetectFacesRequest(BaseModel):
    imageBase64: Optional[str] = Field(None, description="Image to scan, base64 encoded (a data URL prefix is accepted).")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"imageBase64": "/9j/4AAQSkZJRgABAQAAAQABAAD..."}
        }
    )

class DetectFacesResponse(BaseModel):
    faces: List[Rectangle]
