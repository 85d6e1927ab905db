"""Sparse clip-record updates produced at the end of clip processing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from models import ClipStatus
from services.errors import MissingParameters
from services.status_history import isoformat_utc

logger = logging.getLogger(__name__)

REQUIRED_PARAMETERS = ("episodeId", "clipId")
DEFAULT_STATUS = ClipStatus.PROCESSED.value


def _parse_timestamp(value: datetime | str) -> datetime:
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _status_value(status: Any) -> Any:
    return status.value if isinstance(status, ClipStatus) else status


def build_error_info(error: Any, now_iso: str) -> dict[str, Any]:
    """``{message, timestamp, code?}`` from an error mapping or any other value."""
    message = None
    code = None
    if isinstance(error, Mapping):
        message = error.get("message")
        code = error.get("code")
    elif isinstance(error, BaseException):
        message = str(error)
        code = getattr(error, "code", None)
    info: dict[str, Any] = {
        "message": message if message is not None else str(error),
        "timestamp": now_iso,
    }
    if code:
        info["code"] = code
    return info


def build_clip_update(
    request: Mapping[str, Any],
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Validate a partial clip update and derive the fields to persist.

    ``request`` uses the wire (camelCase) names: episodeId, clipId,
    clipStorageKey, fileSize, status, processingStartedAt, duration,
    processingMetadata, error.

    The result only contains keys that were supplied or derivable so that the
    store leaves every other field untouched. ``now`` is read once and shared by
    every timestamp in the result.
    """
    missing = [name for name in REQUIRED_PARAMETERS if not request.get(name)]
    if missing:
        raise MissingParameters(missing)

    now_dt = now or datetime.now(timezone.utc)
    if now_dt.tzinfo is None:
        now_dt = now_dt.replace(tzinfo=timezone.utc)
    now_iso = isoformat_utc(now_dt)

    status = _status_value(request.get("status")) or DEFAULT_STATUS
    update: dict[str, Any] = {
        "episodeId": request["episodeId"],
        "clipId": request["clipId"],
        "status": status,
        "updatedAt": now_iso,
    }

    for name in ("clipStorageKey", "fileSize", "duration"):
        if request.get(name) is not None:
            update[name] = request[name]

    if status == ClipStatus.PROCESSED.value:
        update["processedAt"] = now_iso

    started_at = request.get("processingStartedAt")
    if started_at:
        try:
            update["processingDuration"] = (now_dt - _parse_timestamp(started_at)).total_seconds()
        except (TypeError, ValueError):
            # Duration is unknown; the rest of the update still applies.
            logger.warning(
                "[clip_record] Ignoring unparseable processingStartedAt=%r for clip %s",
                started_at,
                request["clipId"],
            )

    metadata = request.get("processingMetadata")
    if metadata:
        update["processingMetadata"] = metadata

    error = request.get("error")
    if status == ClipStatus.FAILED.value and error:
        update["errorInfo"] = build_error_info(error, now_iso)

    logger.info(
        "[clip_record] Update built: episode=%s clip=%s status=%s fields=%s",
        update["episodeId"],
        update["clipId"],
        status,
        sorted(update),
    )
    return update
