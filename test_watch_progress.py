"""
Progreso de visualización (upsert por usuario y contenido).
"""
import pytest

from app.core.exceptions import InvalidRequest
from app.models.watch_history import WatchHistory
from app.services import viewing

WATCH_PROGRESS_URL = "/api/v1/streaming/watch-progress"


def _rows(session, user="u1"):
    return session.query(WatchHistory).filter(WatchHistory.user_identifier == user).all()


def test_same_video_updates_one_row(session, catalog):
    viewing.save_watch_progress(session, "u1", 30, 600, video_id=catalog["free_movie"])
    viewing.save_watch_progress(session, "u1", 120, 600, video_id=catalog["free_movie"])

    rows = _rows(session)
    assert len(rows) == 1
    assert rows[0].watched_duration == 120
    assert rows[0].total_duration == 600


def test_update_refreshes_watched_at(session, catalog):
    first = viewing.save_watch_progress(session, "u1", 30, 600, video_id=catalog["free_movie"])
    first_seen = first.watched_at

    second = viewing.save_watch_progress(session, "u1", 60, 600, video_id=catalog["free_movie"])

    assert second.id == first.id
    assert second.watched_at >= first_seen


def test_video_and_episode_progress_are_separate_rows(session, catalog):
    viewing.save_watch_progress(session, "u1", 10, 100, video_id=catalog["series"])
    viewing.save_watch_progress(
        session, "u1", 20, 100,
        video_id=catalog["series"], episode_id=catalog["inherited_episode"],
    )
    viewing.save_watch_progress(session, "u1", 15, 100, video_id=catalog["series"])

    rows = sorted(_rows(session), key=lambda r: r.id)
    assert len(rows) == 2
    assert rows[0].episode_id is None
    assert rows[0].watched_duration == 15
    assert rows[1].episode_id == catalog["inherited_episode"]
    assert rows[1].watched_duration == 20


def test_episode_progress_is_matched_by_episode(session, catalog):
    viewing.save_watch_progress(session, "u1", 20, 100, episode_id=catalog["inherited_episode"])
    viewing.save_watch_progress(
        session, "u1", 80, 100,
        video_id=catalog["series"], episode_id=catalog["inherited_episode"],
    )

    rows = _rows(session)
    assert len(rows) == 1
    assert rows[0].watched_duration == 80


def test_progress_is_per_user(session, catalog):
    viewing.save_watch_progress(session, "u1", 10, 100, video_id=catalog["free_movie"])
    viewing.save_watch_progress(session, "u2", 50, 100, video_id=catalog["free_movie"])

    assert len(_rows(session, "u1")) == 1
    assert len(_rows(session, "u2")) == 1


@pytest.mark.parametrize("user,video_id,episode_id", [
    ("", 1, None),
    (None, 1, None),
    ("u1", None, None),
])
def test_save_progress_requires_user_and_content(session, catalog, user, video_id, episode_id):
    with pytest.raises(InvalidRequest):
        viewing.save_watch_progress(session, user, 10, 100, video_id=video_id, episode_id=episode_id)


# --- HTTP ---

def test_watch_progress_endpoint(client, session, catalog):
    payload = {
        "user_identifier": "device-1",
        "video_id": catalog["free_movie"],
        "watched_duration": 42,
        "total_duration": 5400,
    }

    for watched in (42, 90):
        response = client.post(WATCH_PROGRESS_URL, json={**payload, "watched_duration": watched})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Watch progress saved"}

    rows = _rows(session, "device-1")
    assert len(rows) == 1
    assert rows[0].watched_duration == 90


def test_watch_progress_endpoint_missing_reference(client, catalog):
    response = client.post(WATCH_PROGRESS_URL, json={"user_identifier": "device-1", "watched_duration": 5})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_watch_progress_rejects_negative_durations(client, catalog):
    response = client.post(WATCH_PROGRESS_URL, json={
        "user_identifier": "device-1",
        "video_id": catalog["free_movie"],
        "watched_duration": -1,
    })

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
