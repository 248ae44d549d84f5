"""
Pruebas del control de acceso ads-to-unlock.
"""
import pytest
from sqlalchemy import text

from app.core.exceptions import InvalidRequest, NotFound
from app.services import access_gate, viewing
from app.services.access_gate import ContentRef, decide_access

CHECK_ACCESS_URL = "/api/v1/streaming/check-access"


def _watch_ads(session, user, ad_id, times, video_id=None, episode_id=None):
    for _ in range(times):
        viewing.record_ad_view(session, user, ad_id, video_id=video_id, episode_id=episode_id)


# --- Regla pura ---

@pytest.mark.parametrize("watched", [0, 1, 7])
def test_non_premium_is_always_free(watched):
    decision = decide_access(False, 5, watched)
    assert decision.can_watch is True
    assert decision.ads_required == 0
    assert decision.ads_watched == 0
    assert decision.reason == "Free content"


@pytest.mark.parametrize("required,watched,can_watch", [
    (2, 0, False),
    (2, 1, False),
    (2, 2, True),
    (2, 5, True),
    (0, 0, True),
])
def test_premium_unlocks_when_watched_reaches_required(required, watched, can_watch):
    decision = decide_access(True, required, watched)
    assert decision.can_watch is can_watch
    assert decision.ads_required == required
    assert decision.ads_watched == watched


def test_locked_reason_counts_missing_ads():
    assert decide_access(True, 3, 1).reason == "Watch 2 more ads to unlock"
    assert decide_access(True, 3, 3).reason == "Access granted"


def test_content_ref_requires_exactly_one_id():
    with pytest.raises(InvalidRequest):
        ContentRef.exactly_one(None, None)
    with pytest.raises(InvalidRequest):
        ContentRef.exactly_one(1, 2)
    assert ContentRef.exactly_one(None, 2).is_episode


# --- Contra la base de datos ---

def test_free_video_ignores_ad_history(session, catalog):
    _watch_ads(session, "u1", catalog["preroll"], 3, video_id=catalog["free_movie"])

    decision = access_gate.check_access(session, "u1", video_id=catalog["free_movie"])

    assert decision.can_watch is True
    assert decision.ads_watched == 0
    assert decision.ads_required == 0
    assert decision.reason == "Free content"


def test_premium_video_scenario(session, catalog):
    video_id = catalog["premium_movie"]

    locked = access_gate.check_access(session, "u1", video_id=video_id)
    assert locked.model_dump() == {
        "success": True,
        "can_watch": False,
        "ads_watched": 0,
        "ads_required": 2,
        "reason": "Watch 2 more ads to unlock",
    }

    _watch_ads(session, "u1", catalog["preroll"], 2, video_id=video_id)

    granted = access_gate.check_access(session, "u1", video_id=video_id)
    assert granted.model_dump() == {
        "success": True,
        "can_watch": True,
        "ads_watched": 2,
        "ads_required": 2,
        "reason": "Access granted",
    }


def test_each_recorded_view_is_reflected_immediately(session, catalog):
    video_id = catalog["premium_movie"]

    viewing.record_ad_view(session, "u1", catalog["preroll"], video_id=video_id)
    assert access_gate.check_access(session, "u1", video_id=video_id).ads_watched == 1

    viewing.record_ad_view(session, "u1", catalog["preroll"], video_id=video_id)
    assert access_gate.check_access(session, "u1", video_id=video_id).ads_watched == 2


def test_check_access_is_idempotent(session, catalog):
    first = access_gate.check_access(session, "u1", video_id=catalog["premium_movie"])
    second = access_gate.check_access(session, "u1", video_id=catalog["premium_movie"])
    assert first == second


def test_views_are_counted_per_user(session, catalog):
    _watch_ads(session, "someone-else", catalog["preroll"], 2, video_id=catalog["premium_movie"])

    decision = access_gate.check_access(session, "u1", video_id=catalog["premium_movie"])
    assert decision.can_watch is False
    assert decision.ads_watched == 0


def test_episode_inherits_premium_from_video(session, catalog):
    episode_id = catalog["inherited_episode"]

    locked = access_gate.check_access(session, "u1", episode_id=episode_id)
    assert locked.can_watch is False
    # Se usa el ads_to_unlock del episodio, no el de la serie
    assert locked.ads_required == 1
    assert locked.reason == "Watch 1 more ads to unlock"

    viewing.record_ad_view(session, "u1", catalog["preroll"], episode_id=episode_id)
    assert access_gate.check_access(session, "u1", episode_id=episode_id).can_watch is True


def test_episode_flag_false_does_not_override_premium_video(session, catalog):
    decision = access_gate.check_access(session, "u1", episode_id=catalog["free_flagged_episode"])
    assert decision.reason == "Access granted"
    assert decision.ads_required == 0


def test_episode_premium_with_null_ads_requires_none(session, catalog):
    decision = access_gate.check_access(session, "u1", episode_id=catalog["own_premium_episode"])
    assert decision.can_watch is True
    assert decision.ads_required == 0
    assert decision.reason == "Access granted"


def test_video_views_never_count_for_episodes(session, catalog):
    _watch_ads(session, "u1", catalog["preroll"], 5, video_id=catalog["series"])

    decision = access_gate.check_access(session, "u1", episode_id=catalog["inherited_episode"])
    assert decision.ads_watched == 0
    assert decision.can_watch is False


def test_episode_views_never_count_for_video(session, catalog):
    _watch_ads(session, "u1", catalog["preroll"], 5, episode_id=catalog["inherited_episode"])

    decision = access_gate.check_access(session, "u1", video_id=catalog["series"])
    assert decision.ads_watched == 0
    assert decision.ads_required == 3


def test_view_tagged_with_both_ids_counts_on_each_dimension(session, catalog):
    viewing.record_ad_view(
        session, "u1", catalog["preroll"],
        video_id=catalog["series"], episode_id=catalog["inherited_episode"],
    )

    assert access_gate.check_access(session, "u1", video_id=catalog["series"]).ads_watched == 1
    assert access_gate.check_access(session, "u1", episode_id=catalog["inherited_episode"]).ads_watched == 1


def test_missing_user_identifier_is_rejected(session, catalog):
    with pytest.raises(InvalidRequest):
        access_gate.check_access(session, "", video_id=catalog["premium_movie"])
    with pytest.raises(InvalidRequest):
        access_gate.check_access(session, None, video_id=catalog["premium_movie"])


def test_unknown_content_is_not_found(session, catalog):
    with pytest.raises(NotFound):
        access_gate.check_access(session, "u1", video_id=9999)
    with pytest.raises(NotFound):
        access_gate.check_access(session, "u1", episode_id=9999)


# --- Endpoint HTTP ---

def test_check_access_endpoint_scenario(client, catalog):
    payload = {"user_identifier": "u1", "video_id": catalog["premium_movie"]}

    response = client.post(CHECK_ACCESS_URL, json=payload)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "can_watch": False,
        "ads_watched": 0,
        "ads_required": 2,
        "reason": "Watch 2 more ads to unlock",
    }

    for _ in range(2):
        view = client.post("/api/v1/ads/view", json={**payload, "ad_id": catalog["preroll"]})
        assert view.status_code == 200

    response = client.post(CHECK_ACCESS_URL, json=payload)
    assert response.json()["can_watch"] is True
    assert response.json()["reason"] == "Access granted"


def test_check_access_with_both_ids_is_bad_request(client, catalog):
    response = client.post(CHECK_ACCESS_URL, json={
        "user_identifier": "u1",
        "video_id": catalog["series"],
        "episode_id": catalog["inherited_episode"],
    })
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "Exactly one" in response.json()["error"]


def test_check_access_without_ids_is_bad_request(client, catalog):
    response = client.post(CHECK_ACCESS_URL, json={"user_identifier": "u1"})
    assert response.status_code == 400


def test_check_access_without_user_is_bad_request(client, catalog):
    response = client.post(CHECK_ACCESS_URL, json={"video_id": catalog["premium_movie"]})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "User identifier is required"}


def test_check_access_unknown_episode_is_404(client, catalog):
    response = client.post(CHECK_ACCESS_URL, json={"user_identifier": "u1", "episode_id": 4242})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Episode not found"}


def test_check_access_store_failure_is_generic_500(client, session, catalog):
    session.execute(text("DROP TABLE user_ad_views"))
    session.commit()

    response = client.post(CHECK_ACCESS_URL, json={"user_identifier": "u1", "video_id": catalog["premium_movie"]})
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}

    # El contenido gratuito no consulta vistas de anuncios
    response = client.post(CHECK_ACCESS_URL, json={"user_identifier": "u1", "video_id": catalog["free_movie"]})
    assert response.status_code == 200
    assert response.json()["can_watch"] is True
