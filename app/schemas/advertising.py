from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.advertising import AdStatusEnum, AdTypeEnum
from app.schemas.common import reject_null


class AdNetwork(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    is_active: bool = True


class AdvertisementCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    ad_type: AdTypeEnum
    ad_code: str = Field(..., min_length=1)
    ad_network_id: Optional[int] = None
    position: Optional[str] = None
    priority: int = 1


class AdvertisementUpdate(BaseModel):
    """
    Schema para actualizar un anuncio. Solo se escriben los campos presentes.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    ad_type: Optional[AdTypeEnum] = None
    ad_code: Optional[str] = None
    ad_network_id: Optional[int] = None
    position: Optional[str] = None
    priority: Optional[int] = None
    status: Optional[AdStatusEnum] = None

    check_not_null = field_validator("name", "ad_type", "ad_code", "priority", "status")(reject_null)


class Advertisement(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ad_network_id: Optional[int] = None
    name: str
    ad_type: AdTypeEnum
    ad_code: str
    position: Optional[str] = None
    priority: int
    status: AdStatusEnum
    network_name: Optional[str] = None
    network_code: Optional[str] = None
    created_at: Optional[datetime] = None


class AdViewRequest(BaseModel):
    """Registro de un anuncio visto (sistema ads-to-unlock)."""
    user_identifier: Optional[str] = None
    video_id: Optional[int] = None
    episode_id: Optional[int] = None
    ad_id: Optional[int] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "user_identifier": "device-7f3a",
            "video_id": 12,
            "ad_id": 3
        }
    })


class AdViewCount(BaseModel):
    user_identifier: str
    view_count: int
