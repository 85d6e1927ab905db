"""Bearer tokens carrying the caller's tenant, and their decoding into an authorizer context."""

import time

import jwt

from services.errors import Unauthenticated

ALGORITHM = "HS256"
IAT_SKEW_SECONDS = 60


def create_access_token(
    secret: str,
    user_id: str,
    tenant_id: str,
    expiration_seconds: int = 3600,
) -> str:
    """Create an HS256 JWT for ``user_id`` scoped to ``tenant_id``.
    iat is set 60s in the past so slightly skewed clocks still accept it.
    """
    now = int(time.time())
    payload = {
        "sub": user_id,
        "tenantId": tenant_id,
        "iat": now - IAT_SKEW_SECONDS,
        "exp": now + expiration_seconds,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def authorizer_context(token: str, secret: str) -> dict[str, str | None]:
    """Decode ``token`` into the ``{"tenantId", "userId"}`` authorizer mapping."""
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        raise Unauthenticated(f"Invalid token: {exc}") from exc
    return {
        "tenantId": claims.get("tenantId"),
        "userId": claims.get("sub"),
    }
