"""Caller tenant and target episode extraction for inbound requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from services.errors import MissingEpisodeId, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestIdentity:
    tenant_id: str
    episode_id: str


def validate_request(
    path_params: Mapping[str, Any] | None,
    request_context: Mapping[str, Any] | None,
) -> RequestIdentity:
    """Tenant is checked before the episode id, so a request missing both is Unauthenticated."""
    authorizer = (request_context or {}).get("authorizer") or {}
    tenant_id = authorizer.get("tenantId")
    if not tenant_id:
        logger.error("[request_validation] Missing tenantId in authorizer context")
        raise Unauthenticated()

    episode_id = (path_params or {}).get("episodeId")
    if not episode_id:
        raise MissingEpisodeId()

    return RequestIdentity(tenant_id=tenant_id, episode_id=episode_id)
