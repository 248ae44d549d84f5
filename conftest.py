"""
Fixtures compartidas: base SQLite en memoria, cliente HTTP y datos de ejemplo.
Las variables de entorno se fijan antes de importar la configuración.
"""
import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "test-admin-password")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="streaming-logs-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core import security
from app.db.models_registry import Base
from app.db.session import Database
from app.main import create_app
from app.models.advertising import AdNetwork, Advertisement, AdTypeEnum, AdStatusEnum
from app.models.content import Category, Episode, Season, Video, VideoTypeEnum

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


@pytest.fixture
def database():
    db = Database(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    ).open()
    Base.metadata.create_all(bind=db.engine)
    yield db
    db.close()


@pytest.fixture
def session(database):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    token = security.create_access_token(subject="admin", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def catalog(session):
    """
    Catálogo mínimo:
      - free_movie: película gratuita
      - premium_movie: película premium, 2 anuncios
      - series: serie premium con 1 temporada y 2 episodios
        (inherited: is_premium NULL, 1 anuncio; free_flagged: is_premium False, 0 anuncios)
      - free_series: serie gratuita con un episodio premium propio
    """
    action = Category(name="Action", slug="action")
    drama = Category(name="Drama", slug="drama")
    session.add_all([action, drama])
    session.flush()

    free_movie = Video(title="Free Movie", type=VideoTypeEnum.movie, category_id=action.id,
                       description="A free action film", views=5)
    premium_movie = Video(title="Premium Movie", type=VideoTypeEnum.movie, category_id=action.id,
                          is_premium=True, ads_to_unlock=2, views=50)
    series = Video(title="Premium Series", type=VideoTypeEnum.series, category_id=drama.id,
                   is_premium=True, ads_to_unlock=3, views=100)
    free_series = Video(title="Free Series", type=VideoTypeEnum.series, category_id=drama.id, views=10)
    session.add_all([free_movie, premium_movie, series, free_series])
    session.flush()

    season = Season(video_id=series.id, season_number=1, title="Season 1")
    free_season = Season(video_id=free_series.id, season_number=1, title="Season 1")
    session.add_all([season, free_season])
    session.flush()

    inherited = Episode(video_id=series.id, season_id=season.id, episode_number=1,
                        title="Pilot", video_url="https://cdn.example/pilot.m3u8",
                        is_premium=None, ads_to_unlock=1)
    free_flagged = Episode(video_id=series.id, season_id=season.id, episode_number=2,
                           title="Second", video_url="https://cdn.example/second.m3u8",
                           is_premium=False, ads_to_unlock=0)
    own_premium = Episode(video_id=free_series.id, season_id=free_season.id, episode_number=1,
                          title="Locked Finale", video_url="https://cdn.example/finale.m3u8",
                          is_premium=True, ads_to_unlock=None)
    session.add_all([inherited, free_flagged, own_premium])

    network = AdNetwork(name="Test Network", code="testnet")
    session.add(network)
    session.flush()

    preroll = Advertisement(ad_network_id=network.id, name="Preroll A", ad_type=AdTypeEnum.preroll,
                            ad_code="<div>pre</div>", priority=5)
    midroll = Advertisement(ad_network_id=network.id, name="Midroll A", ad_type=AdTypeEnum.midroll,
                            ad_code="<div>mid</div>", priority=3)
    paused = Advertisement(name="Paused banner", ad_type=AdTypeEnum.banner, ad_code="<div>b</div>",
                           position="sidebar", status=AdStatusEnum.inactive)
    session.add_all([preroll, midroll, paused])
    session.commit()

    return {
        "categories": {"action": action.id, "drama": drama.id},
        "free_movie": free_movie.id,
        "premium_movie": premium_movie.id,
        "series": series.id,
        "free_series": free_series.id,
        "season": season.id,
        "inherited_episode": inherited.id,
        "free_flagged_episode": free_flagged.id,
        "own_premium_episode": own_premium.id,
        "network": network.id,
        "preroll": preroll.id,
        "midroll": midroll.id,
        "paused_ad": paused.id,
    }
