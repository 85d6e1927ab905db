"""Append-only status history for episodes, tracks and clips.

The last entry of a non-empty history is the current status. Entries may be
``StatusEntry`` objects or the raw ``{"status", "timestamp"}`` mappings read
back from storage.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from models import ResolvedStatus, StatusEntry
from services.errors import InvalidStatusHistory

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z$")


def isoformat_utc(now: datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    now_dt = now or datetime.now(timezone.utc)
    if now_dt.tzinfo is None:
        now_dt = now_dt.replace(tzinfo=timezone.utc)
    now_dt = now_dt.astimezone(timezone.utc)
    return now_dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now_dt.microsecond // 1000:03d}Z"


def _entry_field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _is_history(history: Any) -> bool:
    return isinstance(history, Sequence) and not isinstance(history, (str, bytes))


def current_status(history: Sequence[StatusEntry | Mapping[str, Any]] | None) -> str | None:
    """Status of the last entry, or None if there is no usable history."""
    if not history or not _is_history(history):
        return None
    # A malformed last entry does not fall back to an earlier one.
    return _entry_field(history[-1], "status") or None


def create_status_entry(
    status: str,
    timestamp: str | None = None,
    *,
    now: datetime | None = None,
) -> StatusEntry:
    return StatusEntry(status=status, timestamp=timestamp or isoformat_utc(now))


def initialize_status_history(
    status: str,
    timestamp: str | None = None,
    *,
    now: datetime | None = None,
) -> list[StatusEntry]:
    return [create_status_entry(status, timestamp, now=now)]


def append_status(
    history: Sequence[StatusEntry | Mapping[str, Any]] | None,
    label: str,
    timestamp: str | None = None,
    *,
    now: datetime | None = None,
) -> list[StatusEntry | Mapping[str, Any]]:
    """Return a new history with one trailing entry; ``history`` is left as it was."""
    entries = list(history) if history and _is_history(history) else []
    entries.append(create_status_entry(label, timestamp, now=now))
    return entries


def resolve_status(
    history: Sequence[StatusEntry | Mapping[str, Any]] | None,
    legacy: str | None,
) -> ResolvedStatus:
    """History wins when it yields a status; otherwise fall back to the legacy scalar."""
    from_history = current_status(history)
    if from_history is not None:
        return ResolvedStatus(value=from_history, source="history")
    if legacy:
        return ResolvedStatus(value=legacy, source="legacy")
    return ResolvedStatus(value=None)


def migrate_to_status_history(
    record: Mapping[str, Any],
    fallback_timestamp: str | None = None,
) -> dict[str, Any]:
    """
    Bring a stored record that only has a legacy ``status`` onto ``statusHistory``.

    Records that already have a history get ``status`` recomputed from it.
    Records with neither are returned as a plain copy.
    """
    migrated = dict(record)
    history = record.get("statusHistory")
    if history and _is_history(history):
        migrated["status"] = current_status(history) or record.get("status")
        return migrated

    if record.get("status"):
        timestamp = (
            fallback_timestamp
            or record.get("createdAt")
            or record.get("updatedAt")
            or isoformat_utc()
        )
        migrated["statusHistory"] = [
            entry.to_dict() for entry in initialize_status_history(record["status"], timestamp)
        ]
        logger.info("[status_history] Migrated legacy status %r to history", record["status"])
    return migrated


def ensure_status_history(
    record: Mapping[str, Any],
    default_status: str = "unknown",
    timestamp: str | None = None,
) -> dict[str, Any]:
    """Like migrate_to_status_history, but always yields a non-empty history."""
    history = record.get("statusHistory")
    if history and _is_history(history):
        ensured = dict(record)
        ensured["status"] = current_status(history) or record.get("status")
        return ensured

    status = record.get("status") or default_status
    timestamp = timestamp or record.get("createdAt") or record.get("updatedAt") or isoformat_utc()
    ensured = dict(record)
    ensured["statusHistory"] = [entry.to_dict() for entry in initialize_status_history(status, timestamp)]
    ensured["status"] = status
    return ensured


def validate_status_history(history: Any) -> None:
    if not isinstance(history, list):
        raise InvalidStatusHistory("statusHistory must be a list")
    if not history:
        raise InvalidStatusHistory("statusHistory cannot be empty")

    for index, entry in enumerate(history):
        if not isinstance(entry, (Mapping, StatusEntry)):
            raise InvalidStatusHistory(f"statusHistory entry at index {index} must be an object")
        status = _entry_field(entry, "status")
        if not status or not isinstance(status, str):
            raise InvalidStatusHistory(f"statusHistory entry at index {index} must have a status string")
        timestamp = _entry_field(entry, "timestamp")
        if not timestamp or not isinstance(timestamp, str):
            raise InvalidStatusHistory(f"statusHistory entry at index {index} must have a timestamp string")
        if not _TIMESTAMP_RE.match(timestamp):
            raise InvalidStatusHistory(
                f"statusHistory entry at index {index} has invalid timestamp format: {timestamp}"
            )


def build_status_update(
    history: Sequence[StatusEntry | Mapping[str, Any]] | None,
    new_status: str,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Sparse update description for a status transition, stamped with a single ``now``."""
    now_iso = isoformat_utc(now or datetime.now(timezone.utc))
    return {
        "statusHistory": append_status(history, new_status, now_iso),
        "status": new_status,
        "updatedAt": now_iso,
    }
