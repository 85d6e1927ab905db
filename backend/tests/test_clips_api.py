"""Tests for the clip read, record-update and download-URL endpoints."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import httpx
import pytest

from app.main import app
from models import Clip, TimeRange
from services import store
from services.auth_token import create_access_token
from services.storage_keys import clip_key

TEST_SECRET = "test-secret-for-clip-api"


def _auth() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(TEST_SECRET, 'user-1', 'tenant-a')}"}


@pytest.fixture(autouse=True)
def clear_store() -> None:
    store.clear()
    with patch.dict("os.environ", {"AUTH_JWT_SECRET": TEST_SECRET}, clear=False):
        yield
    store.clear()


def _seed_clip(**overrides) -> Clip:
    fields = {
        "episode_id": "ep-1",
        "clip_id": "clip-1",
        "status": "processing",
        "segments": [TimeRange("00:10", "00:40")],
        "created_at": "2024-01-01T00:00:00.000Z",
        "updated_at": "2024-01-01T00:00:00.000Z",
    }
    fields.update(overrides)
    clip = Clip(**fields)
    store.clips[("tenant-a", clip.episode_id, clip.clip_id)] = clip
    return clip


@pytest.mark.anyio
async def test_get_clip() -> None:
    _seed_clip()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/episodes/ep-1/clips/clip-1", headers=_auth())
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "clip-1"
    assert body["status"] == "processing"
    assert body["segments"] == [{"startTime": "00:10", "endTime": "00:40"}]
    assert "clipStorageKey" not in body


@pytest.mark.anyio
async def test_get_clip_404() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/episodes/ep-1/clips/missing", headers=_auth())
    assert response.status_code == 404


@pytest.mark.anyio
async def test_update_clip_record_applies_sparse_update() -> None:
    clip = _seed_clip(duration=30.0)
    started = (datetime.now(timezone.utc) - timedelta(seconds=5)).isoformat()
    key = clip_key("ep-1", "clip-1")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.patch(
            "/api/episodes/ep-1/clips/clip-1",
            json={
                "clipStorageKey": key,
                "fileSize": 4096,
                "processingStartedAt": started,
                "processingMetadata": {"segmentCount": 1},
            },
            headers=_auth(),
        )
    assert response.status_code == 200
    update = response.json()
    assert update["status"] == "processed"
    assert update["clipStorageKey"] == key
    assert update["processingDuration"] == pytest.approx(5, abs=1)
    assert "duration" not in update
    assert "errorInfo" not in update

    assert clip.clip_storage_key == key
    assert clip.file_size == 4096
    assert clip.duration == 30.0
    assert clip.status_history[-1].status == "processed"


@pytest.mark.anyio
async def test_update_clip_record_failure_captures_error() -> None:
    clip = _seed_clip()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.patch(
            "/api/episodes/ep-1/clips/clip-1",
            json={"status": "failed", "error": {"message": "stitch failed", "code": "FFMPEG"}},
            headers=_auth(),
        )
    assert response.status_code == 200
    assert response.json()["errorInfo"]["code"] == "FFMPEG"
    assert clip.error_info["message"] == "stitch failed"
    assert clip.processed_at is None


@pytest.mark.anyio
async def test_update_clip_record_rejects_unknown_status() -> None:
    _seed_clip()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.patch(
            "/api/episodes/ep-1/clips/clip-1", json={"status": "exploded"}, headers=_auth()
        )
    assert response.status_code == 422


@pytest.mark.anyio
async def test_clip_url_uses_signed_url() -> None:
    _seed_clip(clip_storage_key=clip_key("ep-1", "clip-1"))
    transport = httpx.ASGITransport(app=app)
    with patch("routes.clips.generate_clip_url", return_value="https://signed.example/clip") as mock_sign:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/episodes/ep-1/clips/clip-1/url", headers=_auth())
    assert response.status_code == 200
    assert response.json() == {"url": "https://signed.example/clip"}
    mock_sign.assert_called_once_with("ep-1/clips/clip-1/clip.mp4", download_name="clip-1.mp4")


@pytest.mark.anyio
async def test_clip_url_404_without_file() -> None:
    _seed_clip()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/episodes/ep-1/clips/clip-1/url", headers=_auth())
    assert response.status_code == 404


@pytest.mark.anyio
async def test_update_clip_record_with_unparseable_start_time() -> None:
    clip = _seed_clip()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.patch(
            "/api/episodes/ep-1/clips/clip-1",
            json={"processingStartedAt": "not-a-date", "fileSize": 10},
            headers=_auth(),
        )
    assert response.status_code == 200
    update = response.json()
    assert "processingDuration" not in update
    assert update["fileSize"] == 10
    assert clip.processing_duration is None
    assert clip.status == "processed"
