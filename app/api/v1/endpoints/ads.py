from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_admin
from app.core.exceptions import NotFound
from app.crud import crud_ad
from app.db.session import get_db
from app.models.advertising import AdStatusEnum, AdTypeEnum
from app.schemas.advertising import (
    AdNetwork, AdViewCount, AdViewRequest, Advertisement,
    AdvertisementCreate, AdvertisementUpdate
)
from app.schemas.common import CreatedResponse, DataResponse, MessageResponse
from app.schemas.token import AdminUser
from app.services import viewing

router = APIRouter()


def _get_ad_or_404(db: Session, ad_id: int):
    ad = crud_ad.get_advertisement(db=db, ad_id=ad_id)
    if not ad:
        raise NotFound("Advertisement not found")
    return ad


@router.get("/networks", response_model=DataResponse[List[AdNetwork]])
def read_ad_networks(db: Session = Depends(get_db)):
    return DataResponse(data=[AdNetwork.model_validate(n) for n in crud_ad.get_networks(db=db)])


@router.get("/", response_model=DataResponse[List[Advertisement]])
def read_advertisements(
    type: Optional[AdTypeEnum] = None,
    position: Optional[str] = None,
    status: Optional[AdStatusEnum] = None,
    db: Session = Depends(get_db),
):
    """
    Lista anuncios con filtros opcionales por tipo, posición y estado.
    """
    ads = crud_ad.get_advertisements(db=db, ad_type=type, position=position, status=status)
    return DataResponse(data=[Advertisement.model_validate(ad) for ad in ads])


@router.get("/active", response_model=DataResponse[List[Advertisement]])
def read_active_advertisements(
    position: Optional[str] = None,
    ad_type: Optional[AdTypeEnum] = None,
    db: Session = Depends(get_db),
):
    ads = crud_ad.get_active_advertisements(
        db=db, ad_types=[ad_type] if ad_type else None, position=position
    )
    return DataResponse(data=[Advertisement.model_validate(ad) for ad in ads])


@router.post("/view", response_model=MessageResponse, summary="Registrar anuncio visto")
def record_ad_view(request: AdViewRequest, db: Session = Depends(get_db)):
    """
    Registra una vista de anuncio para el sistema ads-to-unlock.
    Cada llamada suma una vista, aunque se repita el mismo anuncio.
    """
    viewing.record_ad_view(
        db,
        request.user_identifier,
        request.ad_id,
        video_id=request.video_id,
        episode_id=request.episode_id,
    )
    return {"message": "Ad view recorded"}


@router.get("/view-count/{user_identifier}", response_model=DataResponse[AdViewCount])
def read_ad_view_count(
    user_identifier: str,
    video_id: Optional[int] = None,
    episode_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    count = crud_ad.count_ad_views(db, user_identifier, video_id=video_id, episode_id=episode_id)
    return DataResponse(data=AdViewCount(user_identifier=user_identifier, view_count=count))


@router.get("/{ad_id}", response_model=DataResponse[Advertisement])
def read_advertisement(ad_id: int, db: Session = Depends(get_db)):
    return DataResponse(data=Advertisement.model_validate(_get_ad_or_404(db, ad_id)))


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_advertisement(
    ad: AdvertisementCreate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    db_ad = crud_ad.create_advertisement(db=db, ad=ad)
    return {"message": "Advertisement created successfully", "data": {"id": db_ad.id}}


@router.put("/{ad_id}", response_model=MessageResponse)
def update_advertisement(
    ad_id: int,
    ad_update: AdvertisementUpdate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    ad = _get_ad_or_404(db, ad_id)
    crud_ad.update_advertisement(db=db, db_ad=ad, ad_update=ad_update)
    return {"message": "Advertisement updated successfully"}


@router.delete("/{ad_id}", response_model=MessageResponse)
def delete_advertisement(
    ad_id: int,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    ad = _get_ad_or_404(db, ad_id)
    crud_ad.delete_advertisement(db=db, db_ad=ad)
    return {"message": "Advertisement deleted successfully"}
