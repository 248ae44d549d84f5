# app/models/watch_history.py
from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class WatchHistory(Base):
    """
    Progreso de visualización por (user_identifier, contenido).
    Se hace upsert: existe como máximo una fila por par.
    """
    __tablename__ = "watch_history"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_identifier = Column(String(255), nullable=False, index=True)
    video_id = Column(Integer, ForeignKey('videos.id', ondelete='CASCADE'), nullable=True, index=True)
    episode_id = Column(Integer, ForeignKey('episodes.id', ondelete='CASCADE'), nullable=True, index=True)
    watched_duration = Column(Integer, nullable=False, default=0, server_default='0')
    total_duration = Column(Integer, nullable=False, default=0, server_default='0')
    watched_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    video = relationship("Video")
    episode = relationship("Episode")

    def __repr__(self):
        return (
            f"<WatchHistory(user='{self.user_identifier}', video_id={self.video_id}, "
            f"episode_id={self.episode_id}, watched={self.watched_duration}/{self.total_duration})>"
        )
