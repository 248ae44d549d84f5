# app/models/content.py
import enum
from sqlalchemy import (
    Boolean, Column, Float, Integer, String, Text, ForeignKey,
    TIMESTAMP, UniqueConstraint, Enum as SAEnum, func
)
from sqlalchemy.orm import relationship

from app.db.base import Base


class VideoTypeEnum(enum.Enum):
    movie = "movie"
    series = "series"


class ContentStatusEnum(enum.Enum):
    active = "active"
    inactive = "inactive"


class Category(Base):
    __tablename__ = 'categories'
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    videos = relationship("Video", back_populates="category", passive_deletes=True)


class Video(Base):
    __tablename__ = 'videos'
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    thumbnail = Column(String(500))
    poster_url = Column(String(500))
    trailer_url = Column(String(500))
    category_id = Column(Integer, ForeignKey('categories.id', ondelete='SET NULL'), nullable=True, index=True)
    type = Column(SAEnum(VideoTypeEnum, name='video_type_enum', native_enum=False), nullable=False)
    is_premium = Column(Boolean, nullable=False, default=False, server_default='false')
    ads_to_unlock = Column(Integer, nullable=False, default=0, server_default='0')
    rating = Column(Float, nullable=False, default=0.0, server_default='0')
    release_year = Column(Integer)
    duration = Column(String(50))
    views = Column(Integer, nullable=False, default=0, server_default='0')
    status = Column(
        SAEnum(ContentStatusEnum, name='content_status_enum', native_enum=False),
        nullable=False, default=ContentStatusEnum.active, server_default=ContentStatusEnum.active.value
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), onupdate=func.now())

    category = relationship("Category", back_populates="videos")
    seasons = relationship(
        "Season", back_populates="video", order_by="Season.season_number",
        cascade="all, delete-orphan", passive_deletes=True
    )
    episodes = relationship("Episode", back_populates="video", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def category_name(self):
        return self.category.name if self.category else None

    @property
    def category_slug(self):
        return self.category.slug if self.category else None


class Season(Base):
    __tablename__ = 'seasons'
    id = Column(Integer, primary_key=True)
    video_id = Column(Integer, ForeignKey('videos.id', ondelete='CASCADE'), nullable=False, index=True)
    season_number = Column(Integer, nullable=False)
    title = Column(String(255))
    description = Column(Text)
    poster_url = Column(String(500))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    video = relationship("Video", back_populates="seasons")
    episodes = relationship(
        "Episode", back_populates="season", order_by="Episode.episode_number",
        cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        UniqueConstraint('video_id', 'season_number', name='uq_season_video_number'),
    )


class Episode(Base):
    __tablename__ = 'episodes'
    id = Column(Integer, primary_key=True)
    video_id = Column(Integer, ForeignKey('videos.id', ondelete='CASCADE'), nullable=False, index=True)
    season_id = Column(Integer, ForeignKey('seasons.id', ondelete='CASCADE'), nullable=False, index=True)
    episode_number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    video_url = Column(String(500), nullable=False)
    thumbnail_url = Column(String(500))
    duration = Column(String(50))
    # NULL significa "hereda el flag premium del video"
    is_premium = Column(Boolean, nullable=True)
    ads_to_unlock = Column(Integer, nullable=True, default=0, server_default='0')
    views = Column(Integer, nullable=False, default=0, server_default='0')
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), onupdate=func.now())

    video = relationship("Video", back_populates="episodes")
    season = relationship("Season", back_populates="episodes")

    __table_args__ = (
        UniqueConstraint('season_id', 'episode_number', name='uq_episode_season_number'),
    )

    def __repr__(self):
        return f"<Episode(id={self.id}, video_id={self.video_id}, number={self.episode_number})>"

    @property
    def season_number(self):
        return self.season.season_number if self.season else None

    @property
    def season_title(self):
        return self.season.title if self.season else None

    @property
    def video_title(self):
        return self.video.title if self.video else None

    @property
    def video_type(self):
        return self.video.type if self.video else None
