from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc, func

from app.crud.base import apply_update
from app.models.advertising import (
    AdNetwork, AdStatusEnum, AdTypeEnum, Advertisement, UserAdView
)
from app.schemas.advertising import AdvertisementCreate, AdvertisementUpdate
from decorators.store_logging import store_operation


@store_operation("list_ad_networks")
def get_networks(db: Session) -> List[AdNetwork]:
    return db.query(AdNetwork).order_by(AdNetwork.name).all()


@store_operation("find_advertisement")
def get_advertisement(db: Session, ad_id: int) -> Optional[Advertisement]:
    return (
        db.query(Advertisement)
        .options(joinedload(Advertisement.network))
        .filter(Advertisement.id == ad_id)
        .first()
    )


@store_operation("list_advertisements")
def get_advertisements(
    db: Session,
    ad_type: Optional[AdTypeEnum] = None,
    position: Optional[str] = None,
    status: Optional[AdStatusEnum] = None,
) -> List[Advertisement]:
    """
    Lista anuncios filtrados, por prioridad descendente y luego los más recientes.
    """
    query = db.query(Advertisement).options(joinedload(Advertisement.network))

    if ad_type:
        query = query.filter(Advertisement.ad_type == ad_type)
    if position:
        query = query.filter(Advertisement.position == position)
    if status:
        query = query.filter(Advertisement.status == status)

    return query.order_by(
        desc(Advertisement.priority), desc(Advertisement.created_at), desc(Advertisement.id)
    ).all()


@store_operation("list_active_advertisements")
def get_active_advertisements(
    db: Session,
    ad_types: Optional[List[AdTypeEnum]] = None,
    position: Optional[str] = None,
) -> List[Advertisement]:
    """
    Anuncios activos, opcionalmente restringidos a ciertos tipos, por prioridad.
    """
    query = (
        db.query(Advertisement)
        .options(joinedload(Advertisement.network))
        .filter(Advertisement.status == AdStatusEnum.active)
    )
    if ad_types:
        query = query.filter(Advertisement.ad_type.in_(ad_types))
    if position:
        query = query.filter(Advertisement.position == position)
    return query.order_by(desc(Advertisement.priority), desc(Advertisement.id)).all()


@store_operation("create_advertisement")
def create_advertisement(db: Session, ad: AdvertisementCreate) -> Advertisement:
    db_ad = Advertisement(**ad.model_dump())
    db.add(db_ad)
    db.commit()
    db.refresh(db_ad)
    return db_ad


@store_operation("update_advertisement")
def update_advertisement(db: Session, db_ad: Advertisement, ad_update: AdvertisementUpdate) -> Advertisement:
    return apply_update(db, db_ad, ad_update)


@store_operation("delete_advertisement")
def delete_advertisement(db: Session, db_ad: Advertisement) -> Advertisement:
    db.delete(db_ad)
    db.commit()
    return db_ad


@store_operation("append_ad_view")
def append_ad_view(
    db: Session,
    user_identifier: str,
    ad_id: int,
    video_id: Optional[int] = None,
    episode_id: Optional[int] = None,
) -> UserAdView:
    """
    Agrega un registro de anuncio visto. No valida la existencia de las
    referencias; si la base las rechaza se traduce a InvalidReference.
    """
    db_view = UserAdView(
        user_identifier=user_identifier,
        video_id=video_id,
        episode_id=episode_id,
        ad_id=ad_id,
    )
    db.add(db_view)
    db.commit()
    db.refresh(db_view)
    return db_view


@store_operation("count_ad_views")
def count_ad_views(
    db: Session,
    user_identifier: str,
    video_id: Optional[int] = None,
    episode_id: Optional[int] = None,
) -> int:
    """
    Cuenta anuncios vistos por el usuario. Cada filtro presente se combina con AND;
    el filtro ausente no se aplica (no hay rollup entre episodio y video).
    """
    query = db.query(func.count(UserAdView.id)).filter(UserAdView.user_identifier == user_identifier)

    if video_id is not None:
        query = query.filter(UserAdView.video_id == video_id)
    if episode_id is not None:
        query = query.filter(UserAdView.episode_id == episode_id)

    return query.scalar() or 0
