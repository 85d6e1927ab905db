"""GCS storage for stitched clip files: uploads and time-limited download links."""

import os
from datetime import timedelta
from typing import Any

DEFAULT_BUCKET = "podclip-media"
CLIP_URL_EXPIRATION_SECONDS = 24 * 3600  # 24 hours
CLIP_CONTENT_TYPE = "video/mp4"
# Keys are write-once per clip, so a stored object never changes under its key.
CLIP_CACHE_CONTROL = "private, max-age=86400"


def get_bucket_name() -> str:
    """Bucket name from env or default."""
    return os.environ.get("GCS_BUCKET", "").strip() or DEFAULT_BUCKET


def _clip_blob(clip_key: str, bucket_name: str | None) -> Any:
    from google.cloud import storage

    client = storage.Client()
    return client.bucket(bucket_name or get_bucket_name()).blob(clip_key)


def upload_clip(
    clip_key: str,
    data: bytes,
    *,
    bucket_name: str | None = None,
    metadata: dict[str, str] | None = None,
) -> int:
    """
    Store a stitched clip under its deterministic key and return its size in bytes.

    :param clip_key: Object path, as produced by storage_keys.clip_key
    :param data: MP4 bytes from the stitching step
    :param bucket_name: GCS bucket; default from GCS_BUCKET env
    :param metadata: Custom object metadata, e.g. {"episode-id": ..., "clip-id": ...}
    """
    if not data:
        raise ValueError(f"Refusing to upload an empty clip to {clip_key}")

    blob = _clip_blob(clip_key, bucket_name)
    blob.cache_control = CLIP_CACHE_CONTROL
    if metadata:
        blob.metadata = dict(metadata)
    blob.upload_from_string(data, content_type=CLIP_CONTENT_TYPE)
    return len(data)


def generate_clip_url(
    clip_key: str,
    *,
    bucket_name: str | None = None,
    download_name: str | None = None,
    expiration_seconds: int = CLIP_URL_EXPIRATION_SECONDS,
) -> str:
    """
    Signed v4 GET link to a stored clip.

    With ``download_name`` the link asks the browser to save the file under
    that name instead of playing it inline.
    """
    options: dict[str, Any] = {
        "version": "v4",
        "method": "GET",
        "expiration": timedelta(seconds=expiration_seconds),
        "response_type": CLIP_CONTENT_TYPE,
    }
    if download_name:
        options["response_disposition"] = f'attachment; filename="{download_name}"'
    return _clip_blob(clip_key, bucket_name).generate_signed_url(**options)
