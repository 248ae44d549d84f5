from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import update

from app.crud.base import apply_update
from app.models.content import Episode, Season
from app.schemas.content import EpisodeCreate, EpisodeUpdate, SeasonCreate
from decorators.store_logging import store_operation


@store_operation("find_episode")
def get_episode(db: Session, episode_id: int) -> Optional[Episode]:
    """
    Obtiene un episodio con su temporada y su video.
    """
    return (
        db.query(Episode)
        .options(joinedload(Episode.season), joinedload(Episode.video))
        .filter(Episode.id == episode_id)
        .first()
    )


@store_operation("find_episode_with_video")
def get_episode_with_video(db: Session, episode_id: int) -> Optional[Episode]:
    """
    Obtiene un episodio junto con su video padre (inner join).
    Un episodio huérfano se considera inexistente.
    """
    return (
        db.query(Episode)
        .join(Episode.video)
        .options(joinedload(Episode.video))
        .filter(Episode.id == episode_id)
        .first()
    )


@store_operation("list_episodes_by_video")
def get_episodes_by_video(db: Session, video_id: int, season_number: Optional[int] = None) -> List[Episode]:
    """
    Episodios de un video ordenados por temporada y número.
    """
    query = (
        db.query(Episode)
        .join(Season, Episode.season_id == Season.id)
        .options(joinedload(Episode.season))
        .filter(Episode.video_id == video_id)
    )
    if season_number is not None:
        query = query.filter(Season.season_number == season_number)
    return query.order_by(Season.season_number, Episode.episode_number).all()


@store_operation("find_season")
def get_season(db: Session, season_id: int) -> Optional[Season]:
    return db.query(Season).filter(Season.id == season_id).first()


@store_operation("find_season_by_number")
def get_season_by_number(db: Session, video_id: int, season_number: int) -> Optional[Season]:
    return (
        db.query(Season)
        .filter(Season.video_id == video_id, Season.season_number == season_number)
        .first()
    )


@store_operation("find_episode_by_number")
def get_episode_by_number(db: Session, season_id: int, episode_number: int) -> Optional[Episode]:
    return (
        db.query(Episode)
        .filter(Episode.season_id == season_id, Episode.episode_number == episode_number)
        .first()
    )


@store_operation("create_season")
def create_season(db: Session, season: SeasonCreate) -> Season:
    """
    Crea una temporada. Si no trae título se usa "Season N".
    """
    data = season.model_dump()
    data["title"] = data.get("title") or f"Season {season.season_number}"
    db_season = Season(**data)
    db.add(db_season)
    db.commit()
    db.refresh(db_season)
    return db_season


@store_operation("create_episode")
def create_episode(db: Session, episode: EpisodeCreate) -> Episode:
    db_episode = Episode(**episode.model_dump())
    db.add(db_episode)
    db.commit()
    db.refresh(db_episode)
    return db_episode


@store_operation("update_episode")
def update_episode(db: Session, db_episode: Episode, episode_update: EpisodeUpdate) -> Episode:
    return apply_update(db, db_episode, episode_update)


@store_operation("delete_episode")
def delete_episode(db: Session, db_episode: Episode) -> Episode:
    db.delete(db_episode)
    db.commit()
    return db_episode


@store_operation("increment_episode_views")
def increment_views(db: Session, episode_id: int) -> int:
    result = db.execute(
        update(Episode).where(Episode.id == episode_id).values(views=Episode.views + 1)
    )
    db.commit()
    return result.rowcount
