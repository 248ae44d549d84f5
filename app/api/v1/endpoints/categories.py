from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.serializers import category_with_count
from app.core.deps import get_current_admin
from app.core.exceptions import InvalidRequest, NotFound
from app.crud import crud_category
from app.db.session import get_db
from app.schemas.common import CreatedResponse, DataResponse, MessageResponse
from app.schemas.content import Category, CategoryCreate, CategoryUpdate, CategoryWithCount
from app.schemas.token import AdminUser

router = APIRouter()

DUPLICATE_SLUG = "Category slug already exists"


def _get_category_or_404(db: Session, category_id: int):
    category = crud_category.get_category(db=db, category_id=category_id)
    if not category:
        raise NotFound("Category not found")
    return category


@router.get("/", response_model=DataResponse[List[CategoryWithCount]])
def read_categories(db: Session = Depends(get_db)):
    """
    Todas las categorías con el número de videos activos.
    """
    rows = crud_category.get_categories_with_counts(db=db)
    return DataResponse(data=[category_with_count(category, count) for category, count in rows])


@router.get("/{category_id}", response_model=DataResponse[Category])
def read_category(category_id: int, db: Session = Depends(get_db)):
    return DataResponse(data=Category.model_validate(_get_category_or_404(db, category_id)))


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    """
    Crea una categoría (protegido - requiere autenticación).
    """
    if crud_category.get_category_by_slug(db=db, slug=category.slug):
        raise InvalidRequest(DUPLICATE_SLUG)

    db_category = crud_category.create_category(db=db, category=category)
    return {"message": "Category created successfully", "data": {"id": db_category.id}}


@router.put("/{category_id}", response_model=MessageResponse)
def update_category(
    category_id: int,
    category_update: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    category = _get_category_or_404(db, category_id)

    # Si se está actualizando el slug, verificar que no exista
    if category_update.slug and category_update.slug != category.slug:
        if crud_category.get_category_by_slug(db=db, slug=category_update.slug):
            raise InvalidRequest(DUPLICATE_SLUG)

    crud_category.update_category(db=db, db_category=category, category_update=category_update)
    return {"message": "Category updated successfully"}


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    category = _get_category_or_404(db, category_id)
    crud_category.delete_category(db=db, db_category=category)
    return {"message": "Category deleted successfully"}
