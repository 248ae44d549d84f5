"""create_streaming_tables

Revision ID: 3f1a9c2b7d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Catalogo, anuncios, vistas de anuncios e historial de visualizacion."""
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('thumbnail', sa.String(500), nullable=True),
        sa.Column('poster_url', sa.String(500), nullable=True),
        sa.Column('trailer_url', sa.String(500), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('type', sa.String(6), nullable=False),
        sa.Column('is_premium', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('ads_to_unlock', sa.Integer(), server_default='0', nullable=False),
        sa.Column('rating', sa.Float(), server_default='0', nullable=False),
        sa.Column('release_year', sa.Integer(), nullable=True),
        sa.Column('duration', sa.String(50), nullable=True),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('status', sa.String(8), server_default='active', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index('ix_videos_category_id', 'videos', ['category_id'])

    op.create_table(
        'seasons',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('season_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('poster_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('video_id', 'season_number', name='uq_season_video_number'),
    )
    op.create_index('ix_seasons_video_id', 'seasons', ['video_id'])

    op.create_table(
        'episodes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('season_id', sa.Integer(), sa.ForeignKey('seasons.id', ondelete='CASCADE'), nullable=False),
        sa.Column('episode_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('video_url', sa.String(500), nullable=False),
        sa.Column('thumbnail_url', sa.String(500), nullable=True),
        sa.Column('duration', sa.String(50), nullable=True),
        sa.Column('is_premium', sa.Boolean(), nullable=True),
        sa.Column('ads_to_unlock', sa.Integer(), server_default='0', nullable=True),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint('season_id', 'episode_number', name='uq_episode_season_number'),
    )
    op.create_index('ix_episodes_video_id', 'episodes', ['video_id'])
    op.create_index('ix_episodes_season_id', 'episodes', ['season_id'])

    op.create_table(
        'ad_networks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('code', sa.String(50), nullable=False, unique=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'advertisements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ad_network_id', sa.Integer(), sa.ForeignKey('ad_networks.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('ad_type', sa.String(8), nullable=False),
        sa.Column('ad_code', sa.Text(), nullable=False),
        sa.Column('position', sa.String(50), nullable=True),
        sa.Column('priority', sa.Integer(), server_default='1', nullable=False),
        sa.Column('status', sa.String(8), server_default='active', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'user_ad_views',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_identifier', sa.String(255), nullable=False),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=True),
        sa.Column('episode_id', sa.Integer(), sa.ForeignKey('episodes.id', ondelete='CASCADE'), nullable=True),
        sa.Column('ad_id', sa.Integer(), sa.ForeignKey('advertisements.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_user_ad_views_user_identifier', 'user_ad_views', ['user_identifier'])
    op.create_index('ix_user_ad_views_video_id', 'user_ad_views', ['video_id'])
    op.create_index('ix_user_ad_views_episode_id', 'user_ad_views', ['episode_id'])

    op.create_table(
        'watch_history',
        sa.Column('id', sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column('user_identifier', sa.String(255), nullable=False),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=True),
        sa.Column('episode_id', sa.Integer(), sa.ForeignKey('episodes.id', ondelete='CASCADE'), nullable=True),
        sa.Column('watched_duration', sa.Integer(), server_default='0', nullable=False),
        sa.Column('total_duration', sa.Integer(), server_default='0', nullable=False),
        sa.Column('watched_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_watch_history_id', 'watch_history', ['id'])
    op.create_index('ix_watch_history_user_identifier', 'watch_history', ['user_identifier'])
    op.create_index('ix_watch_history_video_id', 'watch_history', ['video_id'])
    op.create_index('ix_watch_history_episode_id', 'watch_history', ['episode_id'])


def downgrade() -> None:
    op.drop_table('watch_history')
    op.drop_table('user_ad_views')
    op.drop_table('advertisements')
    op.drop_table('ad_networks')
    op.drop_table('episodes')
    op.drop_table('seasons')
    op.drop_table('videos')
    op.drop_table('categories')
