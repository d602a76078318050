"""JWT helpers, session lookup and Flask decorators for Bearer auth."""
from __future__ import annotations

import functools
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import jwt
from flask import current_app, g, request
from loguru import logger

from .permissions import Permission, has_permission
from ..errors import AuthenticationRequired, PermissionDenied


@dataclass(frozen=True)
class Session:
    user_id: str
    roles: List[str] = field(default_factory=list)


def encode(payload: Dict[str, Any]) -> str:
    secret = current_app.config.get("JWT_SECRET", "change-me")
    alg = current_app.config.get("JWT_ALG", "HS256")
    return jwt.encode(payload, secret, algorithm=alg)


def decode(token: str) -> Dict[str, Any]:
    secret = current_app.config.get("JWT_SECRET", "change-me")
    alg = current_app.config.get("JWT_ALG", "HS256")
    return jwt.decode(token, secret, algorithms=[alg])


def issue_token(user_id: str, roles: List[str]) -> str:
    ttl = int(current_app.config.get("JWT_TTL_MINUTES", 720))
    now = datetime.now(timezone.utc)
    return encode({"sub": user_id, "roles": list(roles), "iat": now, "exp": now + timedelta(minutes=ttl)})


def current_session() -> Optional[Session]:
    """Session from the Bearer token, or None when absent or invalid."""
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return None
    token = auth.split(" ", 1)[1]
    try:
        claims = decode(token)
    except jwt.PyJWTError as e:
        logger.info("Rejected bearer token: {}", e)
        return None
    if not claims.get("sub"):
        return None
    return Session(user_id=str(claims["sub"]), roles=list(claims.get("roles") or []))


def require_bearer(fn: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any):
        session = current_session()
        if session is None:
            raise AuthenticationRequired("Missing or invalid Bearer token")
        g.session = session
        return fn(*args, **kwargs)
    return wrapper


def require_permission(permission: Permission) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        @require_bearer
        def wrapper(*args: Any, **kwargs: Any):
            if not has_permission(g.session.roles, permission):
                raise PermissionDenied(f"Forbidden: Permission {permission.value} required")
            return fn(*args, **kwargs)
        return wrapper
    return decorator
