"""FastAPI middleware for HTTP Basic authentication."""

from __future__ import annotations

import base64
import binascii
import secrets

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

log = structlog.get_logger(__name__)


def _decode_basic(header: str) -> tuple[str, str] | None:
    """Decode ``Basic <base64(user:pass)>`` into (user, password)."""
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None
    try:
        raw = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user, sep, password = raw.partition(":")
    if not sep:
        return None
    return user, password


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Annotates requests with auth state; never rejects on its own.

    Sets ``request.state.auth_required`` and, for valid credentials,
    ``request.state.auth_user``. Handlers decide whether to challenge.

    Args:
        app: ASGI application.
        enabled: Whether credentials are required at all.
        accounts: Username -> password map.
    """

    def __init__(
        self,
        app: object,
        enabled: bool = False,
        accounts: dict[str, str] | None = None,
    ) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._enabled = enabled
        self._accounts = dict(accounts or {})

    def _verify(self, user: str, password: str) -> bool:
        expected = self._accounts.get(user)
        if expected is None:
            return False
        return secrets.compare_digest(
            expected.encode("utf-8"), password.encode("utf-8")
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.auth_required = self._enabled
        request.state.auth_user = None

        if self._enabled:
            header = request.headers.get("authorization")
            creds = _decode_basic(header) if header else None
            if creds is not None:
                user, password = creds
                if self._verify(user, password):
                    request.state.auth_user = user
                else:
                    log.warning(
                        "auth_invalid_credentials",
                        user=user,
                        client_ip=request.client.host if request.client else None,
                    )

        return await call_next(request)
