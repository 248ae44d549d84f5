from typing import Dict, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_admin
from app.core.exceptions import InvalidRequest, NotFound
from app.crud import crud_episode, crud_video
from app.db.session import get_db
from app.models.content import VideoTypeEnum
from app.schemas.common import CreatedResponse, DataResponse, MessageResponse
from app.schemas.content import (
    Episode, EpisodeCreate, EpisodeDetail, EpisodeUpdate,
    SeasonCreate, SeasonGroup, VideoEpisodes
)
from app.schemas.token import AdminUser

router = APIRouter()


def _get_episode_or_404(db: Session, episode_id: int):
    episode = crud_episode.get_episode(db=db, episode_id=episode_id)
    if not episode:
        raise NotFound("Episode not found", episode_id=episode_id)
    return episode


@router.get("/video/{video_id}", response_model=DataResponse[VideoEpisodes])
def read_episodes_by_video(video_id: int, season: Optional[int] = None, db: Session = Depends(get_db)):
    """
    Episodios de un video agrupados por temporada.
    """
    episodes = crud_episode.get_episodes_by_video(db=db, video_id=video_id, season_number=season)

    groups: Dict[int, SeasonGroup] = {}
    for episode in episodes:
        number = episode.season.season_number
        if number not in groups:
            groups[number] = SeasonGroup(season_number=number, season_title=episode.season.title)
        groups[number].episodes.append(Episode.model_validate(episode))

    return DataResponse(data=VideoEpisodes(video_id=video_id, seasons=list(groups.values())))


@router.get("/{episode_id}", response_model=DataResponse[EpisodeDetail])
def read_episode(episode_id: int, db: Session = Depends(get_db)):
    episode = _get_episode_or_404(db, episode_id)
    return DataResponse(data=EpisodeDetail.model_validate(episode))


@router.post("/season", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_season(
    season: SeasonCreate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    """
    Crea una temporada para una serie (protegido - requiere autenticación).
    """
    video = crud_video.get_video(db=db, video_id=season.video_id)
    if not video or video.type != VideoTypeEnum.series:
        raise NotFound("Video not found or not a series", video_id=season.video_id)

    if crud_episode.get_season_by_number(db=db, video_id=season.video_id, season_number=season.season_number):
        raise InvalidRequest("Season already exists for this video", video_id=season.video_id)

    db_season = crud_episode.create_season(db=db, season=season)
    return {"message": "Season created successfully", "data": {"id": db_season.id}}


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_episode(
    episode: EpisodeCreate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    """
    Crea un episodio (protegido - requiere autenticación).
    La temporada debe pertenecer al video y el número no debe repetirse.
    """
    db_season = crud_episode.get_season(db=db, season_id=episode.season_id)
    if not db_season or db_season.video_id != episode.video_id:
        raise InvalidRequest(
            "Season not found or does not belong to the specified video",
            video_id=episode.video_id,
        )

    if crud_episode.get_episode_by_number(db=db, season_id=episode.season_id, episode_number=episode.episode_number):
        raise InvalidRequest("Episode number already exists in this season", video_id=episode.video_id)

    db_episode = crud_episode.create_episode(db=db, episode=episode)
    return {"message": "Episode created successfully", "data": {"id": db_episode.id}}


@router.put("/{episode_id}", response_model=MessageResponse)
def update_episode(
    episode_id: int,
    episode_update: EpisodeUpdate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    episode = _get_episode_or_404(db, episode_id)

    # Si cambia el número, no debe chocar con otro episodio de la temporada
    number = episode_update.episode_number
    if number is not None and number != episode.episode_number:
        if crud_episode.get_episode_by_number(db=db, season_id=episode.season_id, episode_number=number):
            raise InvalidRequest("Episode number already exists in this season", episode_id=episode_id)

    crud_episode.update_episode(db=db, db_episode=episode, episode_update=episode_update)
    return {"message": "Episode updated successfully"}


@router.delete("/{episode_id}", response_model=MessageResponse)
def delete_episode(
    episode_id: int,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    episode = _get_episode_or_404(db, episode_id)
    crud_episode.delete_episode(db=db, db_episode=episode)
    return {"message": "Episode deleted successfully"}


@router.post("/{episode_id}/view", response_model=MessageResponse)
def increment_episode_view(episode_id: int, db: Session = Depends(get_db)):
    if not crud_episode.increment_views(db=db, episode_id=episode_id):
        raise NotFound("Episode not found", episode_id=episode_id)
    return {"message": "View recorded"}
