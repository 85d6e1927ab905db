"""Shared route dependencies: caller identity and error translation."""

import logging
import os
from typing import Any

from fastapi import Header, HTTPException

from services.auth_token import authorizer_context
from services.errors import PipelineError
from services.request_validation import RequestIdentity, validate_request

logger = logging.getLogger(__name__)


def http_exception(exc: PipelineError) -> HTTPException:
    """Map a core error onto its HTTP status with an ``{error, message}`` body."""
    detail: dict[str, Any] = {"error": exc.code, "message": str(exc)}
    details = exc.details()
    if details:
        detail["details"] = details
    return HTTPException(status_code=exc.status_code, detail=detail)


def _get_auth_secret() -> str:
    secret = os.environ.get("AUTH_JWT_SECRET", "").strip()
    if not secret:
        raise HTTPException(
            status_code=503,
            detail="Token verification not configured (AUTH_JWT_SECRET)",
        )
    return secret


def get_request_context(authorization: str | None = Header(default=None)) -> dict[str, Any]:
    """Build the request context the validator expects from the Bearer token, if any."""
    if not authorization:
        return {"authorizer": {}}
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        logger.warning("[deps] Invalid authorization header format")
        return {"authorizer": {}}
    try:
        return {"authorizer": authorizer_context(token.strip(), _get_auth_secret())}
    except PipelineError as exc:
        raise http_exception(exc) from exc


def identify(path_params: dict[str, Any], request_context: dict[str, Any]) -> RequestIdentity:
    try:
        return validate_request(path_params, request_context)
    except PipelineError as exc:
        raise http_exception(exc) from exc
