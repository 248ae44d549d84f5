"""
Registro de anuncios vistos: POST /ads/view y conteo por usuario.
"""
import pytest

from app.core.exceptions import InvalidReference, InvalidRequest
from app.crud import crud_ad
from app.models.advertising import UserAdView
from app.services import viewing

AD_VIEW_URL = "/api/v1/ads/view"


def test_record_ad_view_appends_row(session, catalog):
    view = viewing.record_ad_view(session, "u1", catalog["preroll"], video_id=catalog["premium_movie"])

    assert view.id is not None
    assert view.created_at is not None
    assert session.query(UserAdView).count() == 1


def test_record_ad_view_is_not_idempotent(session, catalog):
    for _ in range(3):
        viewing.record_ad_view(session, "u1", catalog["preroll"], video_id=catalog["premium_movie"])

    assert crud_ad.count_ad_views(session, "u1", video_id=catalog["premium_movie"]) == 3


def test_record_ad_view_without_content_reference(session, catalog):
    view = viewing.record_ad_view(session, "u1", catalog["preroll"])

    assert view.video_id is None
    assert view.episode_id is None
    assert crud_ad.count_ad_views(session, "u1") == 1


@pytest.mark.parametrize("user,ad_id", [("", 1), (None, 1), ("u1", None)])
def test_record_ad_view_requires_user_and_ad(session, catalog, user, ad_id):
    with pytest.raises(InvalidRequest):
        viewing.record_ad_view(session, user, ad_id)


def test_unknown_ad_is_an_invalid_reference(session, catalog):
    with pytest.raises(InvalidReference):
        viewing.record_ad_view(session, "u1", 9999, video_id=catalog["premium_movie"])

    # La sesión quedó usable después del rollback
    assert crud_ad.count_ad_views(session, "u1") == 0


def test_count_filters_are_combined(session, catalog):
    viewing.record_ad_view(session, "u1", catalog["preroll"], video_id=catalog["series"])
    viewing.record_ad_view(
        session, "u1", catalog["preroll"],
        video_id=catalog["series"], episode_id=catalog["inherited_episode"],
    )
    viewing.record_ad_view(session, "u1", catalog["midroll"], episode_id=catalog["inherited_episode"])

    assert crud_ad.count_ad_views(session, "u1") == 3
    assert crud_ad.count_ad_views(session, "u1", video_id=catalog["series"]) == 2
    assert crud_ad.count_ad_views(session, "u1", episode_id=catalog["inherited_episode"]) == 2
    assert crud_ad.count_ad_views(
        session, "u1", video_id=catalog["series"], episode_id=catalog["inherited_episode"]
    ) == 1


# --- HTTP ---

def test_ad_view_endpoint(client, catalog):
    response = client.post(AD_VIEW_URL, json={
        "user_identifier": "device-1",
        "video_id": catalog["premium_movie"],
        "ad_id": catalog["preroll"],
    })

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Ad view recorded"}


def test_ad_view_endpoint_requires_no_token(client, catalog):
    response = client.post(AD_VIEW_URL, json={"user_identifier": "anyone", "ad_id": catalog["preroll"]})
    assert response.status_code == 200


def test_ad_view_endpoint_missing_fields(client, catalog):
    response = client.post(AD_VIEW_URL, json={"user_identifier": "device-1"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "User identifier and ad ID are required"}


def test_ad_view_endpoint_unknown_ad(client, catalog):
    response = client.post(AD_VIEW_URL, json={"user_identifier": "device-1", "ad_id": 9999})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Referenced record does not exist"}


def test_view_count_endpoint(client, catalog):
    for _ in range(2):
        client.post(AD_VIEW_URL, json={
            "user_identifier": "device-1",
            "video_id": catalog["premium_movie"],
            "ad_id": catalog["preroll"],
        })
    client.post(AD_VIEW_URL, json={"user_identifier": "device-1", "ad_id": catalog["preroll"]})

    total = client.get("/api/v1/ads/view-count/device-1")
    assert total.json()["data"] == {"user_identifier": "device-1", "view_count": 3}

    scoped = client.get(
        "/api/v1/ads/view-count/device-1", params={"video_id": catalog["premium_movie"]}
    )
    assert scoped.json()["data"]["view_count"] == 2
