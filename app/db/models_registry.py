# app/db/models_registry.py
# Este archivo importa todos los modelos para que Alembic y create_all
# los registren en Base.metadata. Se importa en alembic/env.py

from app.db.base import Base
from app.models.content import Category, Video, Season, Episode
from app.models.advertising import AdNetwork, Advertisement, UserAdView
from app.models.watch_history import WatchHistory

__all__ = [
    "Base", "Category", "Video", "Season", "Episode",
    "AdNetwork", "Advertisement", "UserAdView", "WatchHistory",
]
