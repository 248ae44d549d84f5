from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy import desc, func, or_, select, update

from app.crud.base import apply_update
from app.models.content import (
    Category, ContentStatusEnum, Episode, Season, Video, VideoTypeEnum
)
from app.schemas.content import VideoCreate, VideoUpdate
from decorators.store_logging import store_operation


def episode_count_column():
    """
    Subconsulta correlacionada con el número de episodios de cada video.
    """
    return (
        select(func.count(Episode.id))
        .where(Episode.video_id == Video.id)
        .correlate(Video)
        .scalar_subquery()
        .label("episode_count")
    )


def _apply_filters(query, category: Optional[str] = None, video_type: Optional[VideoTypeEnum] = None,
                   search: Optional[str] = None, status: Optional[ContentStatusEnum] = None):
    if category:
        query = query.outerjoin(Category, Video.category_id == Category.id)
        if category.isdigit():
            query = query.filter(or_(Category.slug == category, Category.id == int(category)))
        else:
            query = query.filter(Category.slug == category)

    if video_type:
        query = query.filter(Video.type == video_type)

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))

    if status:
        query = query.filter(Video.status == status)

    return query


@store_operation("find_video")
def get_video(db: Session, video_id: int) -> Optional[Video]:
    """
    Obtiene un video por su ID.
    """
    return (
        db.query(Video)
        .options(joinedload(Video.category))
        .filter(Video.id == video_id)
        .first()
    )


@store_operation("find_video_with_seasons")
def get_video_with_seasons(db: Session, video_id: int) -> Optional[Video]:
    """
    Obtiene un video con sus temporadas y episodios precargados.
    """
    return (
        db.query(Video)
        .options(
            joinedload(Video.category),
            selectinload(Video.seasons).selectinload(Season.episodes),
        )
        .filter(Video.id == video_id)
        .first()
    )


@store_operation("list_videos")
def get_videos(
    db: Session,
    skip: int = 0,
    limit: int = 20,
    category: Optional[str] = None,
    video_type: Optional[VideoTypeEnum] = None,
    search: Optional[str] = None,
    status: Optional[ContentStatusEnum] = ContentStatusEnum.active,
) -> Tuple[List[Tuple[Video, int]], int]:
    """
    Lista videos con paginación y filtros.
    Devuelve los pares (video, episode_count) y el total sin paginar.
    """
    query = db.query(Video, episode_count_column()).options(joinedload(Video.category))
    query = _apply_filters(query, category, video_type, search, status)
    rows = query.order_by(desc(Video.created_at), desc(Video.id)).offset(skip).limit(limit).all()

    count_query = _apply_filters(db.query(func.count(Video.id)), category, video_type, search, status)
    total = count_query.scalar() or 0

    return [(video, count) for video, count in rows], total


@store_operation("list_videos_ordered")
def get_videos_ordered(
    db: Session,
    *criteria,
    order_by=None,
    limit: int = 10,
) -> List[Tuple[Video, int]]:
    """
    Videos activos que cumplen los criterios, en el orden indicado.
    """
    query = (
        db.query(Video, episode_count_column())
        .options(joinedload(Video.category))
        .filter(Video.status == ContentStatusEnum.active, *criteria)
    )
    order = order_by if order_by is not None else desc(Video.created_at)
    rows = query.order_by(order, desc(Video.id)).limit(limit).all()
    return [(video, count) for video, count in rows]


@store_operation("search_videos")
def search_videos(
    db: Session,
    q: str,
    video_type: Optional[VideoTypeEnum] = None,
    category: Optional[str] = None,
    limit: int = 20,
) -> List[Tuple[Video, int]]:
    """
    Búsqueda por título o descripción sobre videos activos, por popularidad.
    """
    query = db.query(Video, episode_count_column()).options(joinedload(Video.category))
    query = _apply_filters(query, category, video_type, q, ContentStatusEnum.active)
    rows = query.order_by(desc(Video.views), desc(Video.id)).limit(limit).all()
    return [(video, count) for video, count in rows]


@store_operation("create_video")
def create_video(db: Session, video: VideoCreate) -> Video:
    """
    Crea un nuevo video.
    """
    db_video = Video(**video.model_dump())
    db.add(db_video)
    db.commit()
    db.refresh(db_video)
    return db_video


@store_operation("update_video")
def update_video(db: Session, db_video: Video, video_update: VideoUpdate) -> Video:
    """
    Actualiza un video existente.
    """
    return apply_update(db, db_video, video_update)


@store_operation("delete_video")
def delete_video(db: Session, db_video: Video) -> Video:
    """
    Elimina un video junto con sus temporadas y episodios.
    """
    db.delete(db_video)
    db.commit()
    return db_video


@store_operation("increment_video_views")
def increment_views(db: Session, video_id: int) -> int:
    """
    Incrementa el contador de vistas. Devuelve las filas afectadas.
    """
    result = db.execute(
        update(Video).where(Video.id == video_id).values(views=Video.views + 1)
    )
    db.commit()
    return result.rowcount
