from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.content import ContentStatusEnum, VideoTypeEnum
from app.schemas.common import reject_null


# --- Category Schemas ---

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)


class CategoryUpdate(BaseModel):
    """
    Solo los campos enviados se actualizan.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=100)

    check_not_null = field_validator("name", "slug")(reject_null)


class Category(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    created_at: Optional[datetime] = None


class CategoryWithCount(Category):
    video_count: int = 0


# --- Video Schemas ---

class VideoBase(BaseModel):
    """
    Schema base para las propiedades compartidas de un video.
    """
    title: str = Field(..., min_length=1, max_length=255)
    type: VideoTypeEnum
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    category_id: Optional[int] = None
    is_premium: bool = False
    ads_to_unlock: int = Field(0, ge=0)
    rating: float = 0.0
    release_year: Optional[int] = None
    duration: Optional[str] = None
    status: ContentStatusEnum = ContentStatusEnum.active


class VideoCreate(VideoBase):
    pass


class VideoUpdate(BaseModel):
    """
    Schema para actualizar un video. Solo se escriben los campos presentes.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[VideoTypeEnum] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    category_id: Optional[int] = None
    is_premium: Optional[bool] = None
    ads_to_unlock: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = None
    release_year: Optional[int] = None
    duration: Optional[str] = None
    status: Optional[ContentStatusEnum] = None

    check_not_null = field_validator("title", "type", "is_premium", "ads_to_unlock", "rating", "status")(reject_null)


class Video(VideoBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    views: int = 0
    category_name: Optional[str] = None
    category_slug: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VideoSummary(Video):
    episode_count: int = 0


# --- Season / Episode Schemas ---

class SeasonCreate(BaseModel):
    video_id: int
    season_number: int = Field(..., ge=1)
    title: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None


class EpisodeCreate(BaseModel):
    video_id: int
    season_id: int
    episode_number: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=255)
    video_url: str = Field(..., min_length=1)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[str] = None
    is_premium: Optional[bool] = None
    ads_to_unlock: int = Field(0, ge=0)


class EpisodeUpdate(BaseModel):
    episode_number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[str] = None
    is_premium: Optional[bool] = None
    ads_to_unlock: Optional[int] = Field(None, ge=0)

    check_not_null = field_validator("episode_number", "title", "video_url")(reject_null)


class Episode(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    video_id: int
    season_id: int
    episode_number: int
    title: str
    description: Optional[str] = None
    video_url: str
    thumbnail_url: Optional[str] = None
    duration: Optional[str] = None
    is_premium: Optional[bool] = None
    ads_to_unlock: Optional[int] = 0
    views: int = 0
    created_at: Optional[datetime] = None


class EpisodeDetail(Episode):
    season_number: Optional[int] = None
    video_title: Optional[str] = None
    video_type: Optional[VideoTypeEnum] = None


class Season(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    video_id: int
    season_number: int
    title: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None


class SeasonWithEpisodes(Season):
    episodes: List[Episode] = []


class SeasonGroup(BaseModel):
    season_number: int
    season_title: Optional[str] = None
    episodes: List[Episode] = []


class VideoEpisodes(BaseModel):
    video_id: int
    seasons: List[SeasonGroup]


class VideoDetail(Video):
    seasons: Optional[List[SeasonWithEpisodes]] = None
