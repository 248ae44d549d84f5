# app/api/v1/endpoints/streaming.py
"""
Endpoints públicos de reproducción: portada, control de acceso
ads-to-unlock, datos del reproductor, progreso e historial, búsqueda.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.api.v1.serializers import category_with_count, video_summary
from app.core.exceptions import InvalidRequest, NotFound
from app.crud import crud_ad, crud_category, crud_episode, crud_video, crud_watch_history
from app.db.session import get_db
from app.models.advertising import AdTypeEnum
from app.models.content import Video, VideoTypeEnum
from app.schemas.advertising import Advertisement
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.content import EpisodeDetail, Video as VideoSchema
from app.schemas.streaming import (
    CheckAccessRequest,
    CheckAccessResponse,
    HomepageData,
    PlayerAds,
    PlayerData,
    SearchResponse,
    WatchHistoryItem,
    WatchProgressRequest,
)
from app.services import access_gate, viewing

router = APIRouter()

SEARCH_MIN_LENGTH = 3


@router.get("/homepage", response_model=DataResponse[HomepageData], summary="Contenido de la portada")
def get_homepage(db: Session = Depends(get_db)):
    """
    Destacados (premium), últimas películas, series populares y categorías con videos.
    """
    featured = crud_video.get_videos_ordered(db, Video.is_premium.is_(True))
    latest_movies = crud_video.get_videos_ordered(db, Video.type == VideoTypeEnum.movie)
    popular_series = crud_video.get_videos_ordered(
        db, Video.type == VideoTypeEnum.series, order_by=desc(Video.views)
    )
    categories = crud_category.get_categories_with_counts(db, only_with_videos=True)

    return DataResponse(data=HomepageData(
        featured=[video_summary(v, c) for v, c in featured],
        latest_movies=[video_summary(v, c) for v, c in latest_movies],
        popular_series=[video_summary(v, c) for v, c in popular_series],
        categories=[category_with_count(cat, c) for cat, c in categories],
    ))


@router.post(
    "/check-access",
    response_model=CheckAccessResponse,
    summary="Verificar acceso a contenido premium",
    description="Determina si el usuario ya vio suficientes anuncios para desbloquear el contenido."
)
def check_access(request: CheckAccessRequest, db: Session = Depends(get_db)):
    """
    - **user_identifier**: identificador del usuario o dispositivo
    - **video_id** / **episode_id**: exactamente uno de los dos
    """
    return access_gate.check_access(
        db,
        request.user_identifier,
        video_id=request.video_id,
        episode_id=request.episode_id,
    )


@router.get("/player/{video_id}", response_model=DataResponse[PlayerData], summary="Datos del reproductor")
def get_player_data(video_id: int, episode_id: Optional[int] = None, db: Session = Depends(get_db)):
    """
    Contenido a reproducir y anuncios activos.
    Películas: preroll. Episodios: preroll y midroll.
    """
    if episode_id is not None:
        episode = crud_episode.get_episode(db, episode_id)
        if not episode or episode.video_id != video_id:
            raise NotFound("Episode not found", video_id=video_id, episode_id=episode_id)
        content = EpisodeDetail.model_validate(episode).model_dump(mode="json")
        content["poster_url"] = episode.video.poster_url
        content["video_description"] = episode.video.description
        ad_types = [AdTypeEnum.preroll, AdTypeEnum.midroll]
    else:
        video = crud_video.get_video(db, video_id)
        if not video:
            raise NotFound("Video not found", video_id=video_id)
        content = VideoSchema.model_validate(video).model_dump(mode="json")
        ad_types = [AdTypeEnum.preroll]

    ads = [Advertisement.model_validate(ad) for ad in crud_ad.get_active_advertisements(db, ad_types=ad_types)]

    return DataResponse(data=PlayerData(
        content=content,
        ads=PlayerAds(
            preroll=[ad for ad in ads if ad.ad_type == AdTypeEnum.preroll],
            midroll=[ad for ad in ads if ad.ad_type == AdTypeEnum.midroll],
        ),
    ))


@router.post("/watch-progress", response_model=MessageResponse, summary="Guardar progreso de visualización")
def save_watch_progress(request: WatchProgressRequest, db: Session = Depends(get_db)):
    viewing.save_watch_progress(
        db,
        request.user_identifier,
        request.watched_duration,
        request.total_duration,
        video_id=request.video_id,
        episode_id=request.episode_id,
    )
    return {"message": "Watch progress saved"}


@router.get(
    "/history/{user_identifier}",
    response_model=DataResponse[List[WatchHistoryItem]],
    summary="Historial de visualización"
)
def get_watch_history(user_identifier: str, db: Session = Depends(get_db)):
    items = []
    for record in crud_watch_history.get_history(db, user_identifier):
        item = WatchHistoryItem.model_validate(record)
        if record.video:
            item.video_title = record.video.title
            item.video_thumbnail = record.video.thumbnail
            item.video_type = record.video.type
        if record.episode:
            item.episode_title = record.episode.title
            item.episode_number = record.episode.episode_number
            item.season_number = record.episode.season_number
        items.append(item)
    return DataResponse(data=items)


@router.get("/search", response_model=SearchResponse, summary="Buscar contenido")
def search(
    q: Optional[str] = None,
    type: Optional[VideoTypeEnum] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    if not q or len(q.strip()) < SEARCH_MIN_LENGTH:
        raise InvalidRequest(f"Search query must be at least {SEARCH_MIN_LENGTH} characters")

    results = crud_video.search_videos(db, q.strip(), video_type=type, category=category)
    return SearchResponse(data=[video_summary(v, c) for v, c in results], query=q)
