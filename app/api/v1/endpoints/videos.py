import math
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.serializers import video_summary
from app.core.deps import get_current_admin
from app.core.exceptions import NotFound
from app.crud import crud_video
from app.db.session import get_db
from app.models.content import ContentStatusEnum, VideoTypeEnum
from app.schemas.common import CreatedResponse, MessageResponse, DataResponse, PaginatedResponse, Pagination
from app.schemas.content import VideoCreate, VideoDetail, VideoSummary, VideoUpdate
from app.schemas.token import AdminUser

router = APIRouter()


def _get_video_or_404(db: Session, video_id: int):
    video = crud_video.get_video(db=db, video_id=video_id)
    if not video:
        raise NotFound("Video not found", video_id=video_id)
    return video


@router.get("/", response_model=PaginatedResponse[List[VideoSummary]])
def read_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[str] = None,
    type: Optional[VideoTypeEnum] = None,
    search: Optional[str] = None,
    status: Optional[ContentStatusEnum] = ContentStatusEnum.active,
    db: Session = Depends(get_db),
):
    """
    Obtiene una lista paginada de videos.
    Por defecto solo muestra los videos activos.
    """
    rows, total = crud_video.get_videos(
        db=db,
        skip=(page - 1) * limit,
        limit=limit,
        category=category,
        video_type=type,
        search=search,
        status=status,
    )
    return PaginatedResponse(
        data=[video_summary(video, count) for video, count in rows],
        pagination=Pagination(
            current_page=page,
            per_page=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        ),
    )


@router.get("/{video_id}", response_model=DataResponse[VideoDetail])
def read_video(video_id: int, db: Session = Depends(get_db)):
    """
    Obtiene un video. Las series incluyen sus temporadas con episodios.
    """
    video = crud_video.get_video_with_seasons(db=db, video_id=video_id)
    if not video:
        raise NotFound("Video not found", video_id=video_id)

    detail = VideoDetail.model_validate(video)
    if video.type != VideoTypeEnum.series:
        detail.seasons = None
    return DataResponse(data=detail)


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_video(
    video: VideoCreate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    """
    Crea un nuevo video (protegido - requiere autenticación).
    """
    db_video = crud_video.create_video(db=db, video=video)
    return {"message": "Video created successfully", "data": {"id": db_video.id}}


@router.put("/{video_id}", response_model=MessageResponse)
def update_video(
    video_id: int,
    video_update: VideoUpdate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    """
    Actualiza un video existente (protegido - requiere autenticación).
    Solo se modifican los campos enviados.
    """
    video = _get_video_or_404(db, video_id)
    crud_video.update_video(db=db, db_video=video, video_update=video_update)
    return {"message": "Video updated successfully"}


@router.delete("/{video_id}", response_model=MessageResponse)
def delete_video(
    video_id: int,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    """
    Elimina un video con sus temporadas y episodios (protegido - requiere autenticación).
    """
    video = _get_video_or_404(db, video_id)
    crud_video.delete_video(db=db, db_video=video)
    return {"message": "Video deleted successfully"}


@router.post("/{video_id}/view", response_model=MessageResponse)
def increment_video_view(video_id: int, db: Session = Depends(get_db)):
    if not crud_video.increment_views(db=db, video_id=video_id):
        raise NotFound("Video not found", video_id=video_id)
    return {"message": "View recorded"}
