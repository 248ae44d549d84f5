# app/schemas/streaming.py
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.models.content import VideoTypeEnum
from app.schemas.advertising import Advertisement
from app.schemas.content import CategoryWithCount, VideoSummary


class CheckAccessRequest(BaseModel):
    """Schema para consultar si un usuario puede reproducir un contenido."""
    user_identifier: Optional[str] = Field(None, description="Identificador del usuario o dispositivo")
    video_id: Optional[int] = Field(None, description="ID del video (excluyente con episode_id)")
    episode_id: Optional[int] = Field(None, description="ID del episodio (excluyente con video_id)")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "user_identifier": "device-7f3a",
            "video_id": 12
        }
    })


class CheckAccessResponse(BaseModel):
    """Schema para la respuesta de la verificación de acceso."""
    success: bool = True
    can_watch: bool
    ads_watched: int
    ads_required: int
    reason: str

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "success": True,
            "can_watch": False,
            "ads_watched": 0,
            "ads_required": 2,
            "reason": "Watch 2 more ads to unlock"
        }
    })


class WatchProgressRequest(BaseModel):
    """Schema para registrar el progreso de visualización."""
    user_identifier: Optional[str] = None
    video_id: Optional[int] = None
    episode_id: Optional[int] = None
    watched_duration: int = Field(0, ge=0, description="Segundos vistos")
    total_duration: int = Field(0, ge=0, description="Duración total en segundos")


class WatchHistoryItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_identifier: str
    video_id: Optional[int] = None
    episode_id: Optional[int] = None
    watched_duration: int
    total_duration: int
    watched_at: Optional[datetime] = None
    video_title: Optional[str] = None
    video_thumbnail: Optional[str] = None
    video_type: Optional[VideoTypeEnum] = None
    episode_title: Optional[str] = None
    episode_number: Optional[int] = None
    season_number: Optional[int] = None


class HomepageData(BaseModel):
    featured: List[VideoSummary]
    latest_movies: List[VideoSummary]
    popular_series: List[VideoSummary]
    categories: List[CategoryWithCount]


class PlayerAds(BaseModel):
    preroll: List[Advertisement] = []
    midroll: List[Advertisement] = []


class PlayerData(BaseModel):
    content: Dict[str, Any]
    ads: PlayerAds


class SearchResponse(BaseModel):
    success: bool = True
    data: List[VideoSummary]
    query: str
