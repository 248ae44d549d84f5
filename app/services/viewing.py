# app/services/viewing.py
"""
Registro de anuncios vistos y del progreso de visualización.

Ambas operaciones aceptan un user_identifier enviado por el cliente sin
más prueba de identidad.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidRequest
from app.crud import crud_ad, crud_watch_history
from app.models.advertising import UserAdView
from app.models.watch_history import WatchHistory

logger = logging.getLogger("app.services.viewing")


def record_ad_view(
    db: Session,
    user_identifier: Optional[str],
    ad_id: Optional[int],
    video_id: Optional[int] = None,
    episode_id: Optional[int] = None,
) -> UserAdView:
    """
    Agrega una vista de anuncio. video_id y episode_id son opcionales e
    independientes. No es idempotente: cada llamada suma una vista.
    """
    if not user_identifier or ad_id is None:
        raise InvalidRequest("User identifier and ad ID are required", ad_id=ad_id)

    view = crud_ad.append_ad_view(
        db, user_identifier, ad_id, video_id=video_id, episode_id=episode_id
    )
    logger.info(
        "Ad view recorded",
        extra={
            "user_identifier": user_identifier,
            "ad_id": ad_id,
            "video_id": video_id,
            "episode_id": episode_id,
        },
    )
    return view


def save_watch_progress(
    db: Session,
    user_identifier: Optional[str],
    watched_duration: int,
    total_duration: int,
    video_id: Optional[int] = None,
    episode_id: Optional[int] = None,
) -> WatchHistory:
    """
    Guarda el progreso (upsert) de un usuario sobre un video o episodio.
    """
    if not user_identifier or (video_id is None and episode_id is None):
        raise InvalidRequest(
            "User identifier and video/episode ID are required",
            video_id=video_id, episode_id=episode_id,
        )

    return crud_watch_history.upsert_watch_history(
        db,
        user_identifier,
        watched_duration,
        total_duration,
        video_id=video_id,
        episode_id=episode_id,
    )
