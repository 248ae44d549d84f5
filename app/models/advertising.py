# app/models/advertising.py
import enum
from sqlalchemy import (
    Boolean, Column, Integer, String, Text, ForeignKey,
    TIMESTAMP, Enum as SAEnum, func
)
from sqlalchemy.orm import relationship

from app.db.base import Base


class AdTypeEnum(enum.Enum):
    preroll = "preroll"
    midroll = "midroll"
    postroll = "postroll"
    banner = "banner"
    popup = "popup"


class AdStatusEnum(enum.Enum):
    active = "active"
    inactive = "inactive"


class AdNetwork(Base):
    __tablename__ = 'ad_networks'
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    code = Column(String(50), unique=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default='true')
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    advertisements = relationship("Advertisement", back_populates="network", passive_deletes=True)


class Advertisement(Base):
    __tablename__ = 'advertisements'
    id = Column(Integer, primary_key=True)
    ad_network_id = Column(Integer, ForeignKey('ad_networks.id', ondelete='SET NULL'), nullable=True)
    name = Column(String(255), nullable=False)
    ad_type = Column(SAEnum(AdTypeEnum, name='ad_type_enum', native_enum=False), nullable=False)
    ad_code = Column(Text, nullable=False)
    position = Column(String(50))
    priority = Column(Integer, nullable=False, default=1, server_default='1')
    status = Column(
        SAEnum(AdStatusEnum, name='ad_status_enum', native_enum=False),
        nullable=False, default=AdStatusEnum.active, server_default=AdStatusEnum.active.value
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    network = relationship("AdNetwork", back_populates="advertisements")

    @property
    def network_name(self):
        return self.network.name if self.network else None

    @property
    def network_code(self):
        return self.network.code if self.network else None


class UserAdView(Base):
    """
    Registro append-only de un anuncio visto por un usuario.
    Nunca se actualiza ni se borra desde la API.
    """
    __tablename__ = 'user_ad_views'
    id = Column(Integer, primary_key=True)
    user_identifier = Column(String(255), nullable=False, index=True)
    video_id = Column(Integer, ForeignKey('videos.id', ondelete='CASCADE'), nullable=True, index=True)
    episode_id = Column(Integer, ForeignKey('episodes.id', ondelete='CASCADE'), nullable=True, index=True)
    ad_id = Column(Integer, ForeignKey('advertisements.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return (
            f"<UserAdView(user='{self.user_identifier}', video_id={self.video_id}, "
            f"episode_id={self.episode_id}, ad_id={self.ad_id})>"
        )
