# app/api/v1/serializers.py
# Conversión de filas (modelo, agregado) a schemas de respuesta
from app.models.content import Category, Video
from app.schemas.content import CategoryWithCount, VideoSummary


def video_summary(video: Video, episode_count: int) -> VideoSummary:
    summary = VideoSummary.model_validate(video)
    summary.episode_count = episode_count or 0
    return summary


def category_with_count(category: Category, video_count: int) -> CategoryWithCount:
    item = CategoryWithCount.model_validate(category)
    item.video_count = video_count or 0
    return item
