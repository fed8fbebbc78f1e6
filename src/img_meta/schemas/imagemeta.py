from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ImageMetaResponse(BaseModel):
    """Serialized shape of one report entry."""

    model_config = ConfigDict(populate_by_name=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    captured_at: Optional[str] = Field(None, alias="capturedAt", description="Capture time, ISO-8601 UTC")
    map_link: Optional[str] = Field(None, alias="mapLink", description="Google Maps search URL")
