"""Deterministic object-storage keys for clips, segments and HLS chunks.

Keys double as the identity of a storage write, so the same inputs must always
produce the same key.
"""


def _scoped(key: str, tenant_id: str | None) -> str:
    return f"{tenant_id}/{key}" if tenant_id else key


def clip_key(episode_id: str, clip_id: str, *, tenant_id: str | None = None) -> str:
    return _scoped(f"{episode_id}/clips/{clip_id}/clip.mp4", tenant_id)


def segment_key(
    episode_id: str,
    clip_id: str,
    index: int,
    *,
    tenant_id: str | None = None,
) -> str:
    # Minimum width 3; indices >= 1000 keep all their digits.
    return _scoped(f"{episode_id}/clips/{clip_id}/segments/{index:03d}.mp4", tenant_id)


def chunk_key(tenant_id: str, episode_id: str, track_name: str, filename: str) -> str:
    return f"{tenant_id}/{episode_id}/videos/{track_name}/chunks/{filename}"


def manifest_key(tenant_id: str, episode_id: str, track_name: str) -> str:
    return chunk_key(tenant_id, episode_id, track_name, f"{track_name}_chunk.m3u8")
