from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from app.crud.base import apply_update
from app.models.content import Category, ContentStatusEnum, Video
from app.schemas.content import CategoryCreate, CategoryUpdate
from decorators.store_logging import store_operation


@store_operation("find_category")
def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.query(Category).filter(Category.id == category_id).first()


@store_operation("find_category_by_slug")
def get_category_by_slug(db: Session, slug: str) -> Optional[Category]:
    return db.query(Category).filter(Category.slug == slug).first()


@store_operation("list_categories")
def get_categories_with_counts(db: Session, only_with_videos: bool = False) -> List[Tuple[Category, int]]:
    """
    Categorías con el número de videos activos.
    Con only_with_videos=True se omiten las vacías y se ordena por cantidad.
    """
    video_count = func.count(Video.id).label("video_count")
    query = (
        db.query(Category, video_count)
        .outerjoin(
            Video,
            and_(Video.category_id == Category.id, Video.status == ContentStatusEnum.active),
        )
        .group_by(Category.id)
    )
    if only_with_videos:
        query = query.having(func.count(Video.id) > 0).order_by(video_count.desc(), Category.name)
    else:
        query = query.order_by(Category.name)
    return [(category, count) for category, count in query.all()]


@store_operation("create_category")
def create_category(db: Session, category: CategoryCreate) -> Category:
    db_category = Category(name=category.name, slug=category.slug)
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


@store_operation("update_category")
def update_category(db: Session, db_category: Category, category_update: CategoryUpdate) -> Category:
    return apply_update(db, db_category, category_update)


@store_operation("delete_category")
def delete_category(db: Session, db_category: Category) -> Category:
    db.delete(db_category)
    db.commit()
    return db_category
