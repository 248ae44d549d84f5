from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc

from app.models.content import Episode
from app.models.watch_history import WatchHistory
from decorators.store_logging import store_operation


def _find_progress(
    db: Session, user_identifier: str, video_id: Optional[int], episode_id: Optional[int]
) -> Optional[WatchHistory]:
    query = db.query(WatchHistory).filter(WatchHistory.user_identifier == user_identifier)
    if episode_id is not None:
        query = query.filter(WatchHistory.episode_id == episode_id)
    else:
        # Un registro a nivel de video nunca se mezcla con uno de episodio
        query = query.filter(WatchHistory.video_id == video_id, WatchHistory.episode_id.is_(None))
    return query.order_by(WatchHistory.id).first()


@store_operation("upsert_watch_history")
def upsert_watch_history(
    db: Session,
    user_identifier: str,
    watched_duration: int,
    total_duration: int,
    video_id: Optional[int] = None,
    episode_id: Optional[int] = None,
) -> WatchHistory:
    """
    Inserta o actualiza el progreso de (user_identifier, contenido).
    Con episode_id la llave es el episodio; sin él, el video con episode_id NULL.
    """
    progress = _find_progress(db, user_identifier, video_id, episode_id)

    if progress:
        progress.watched_duration = watched_duration
        progress.total_duration = total_duration
        progress.watched_at = datetime.now(timezone.utc)
    else:
        progress = WatchHistory(
            user_identifier=user_identifier,
            video_id=video_id,
            episode_id=episode_id,
            watched_duration=watched_duration,
            total_duration=total_duration,
            watched_at=datetime.now(timezone.utc),
        )
        db.add(progress)

    db.commit()
    db.refresh(progress)
    return progress


@store_operation("list_watch_history")
def get_history(db: Session, user_identifier: str) -> List[WatchHistory]:
    """
    Historial del usuario, el más reciente primero.
    """
    return (
        db.query(WatchHistory)
        .options(
            joinedload(WatchHistory.video),
            joinedload(WatchHistory.episode).joinedload(Episode.season),
        )
        .filter(WatchHistory.user_identifier == user_identifier)
        .order_by(desc(WatchHistory.watched_at), desc(WatchHistory.id))
        .all()
    )
