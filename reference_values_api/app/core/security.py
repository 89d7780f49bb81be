"""
Token based access control.

Every route of the API is protected by a single static allow-list of
tokens taken from ``settings.api_tokens``.  Clients send one of them
verbatim in the ``Authorization`` header; no ``Bearer`` prefix is
stripped and tokens never expire.  ``AuthMiddleware`` performs the
check before any routing takes place, so a rejected request never
reaches a handler.
"""

import hmac
import logging
from typing import FrozenSet, Iterable, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .exceptions import AuthError

logger = logging.getLogger(__name__)


class TokenStore:
    """Immutable set of tokens accepted by the API."""

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens: FrozenSet[str] = frozenset(t for t in tokens if t)

    def __len__(self) -> int:
        return len(self._tokens)

    def is_valid(self, token: Optional[str]) -> bool:
        """Return ``True`` if ``token`` exactly matches a configured token.

        Every configured token is compared with ``hmac.compare_digest`` and
        the loop does not stop at the first match, so the time taken does
        not depend on which token matched.
        """
        if not token:
            return False
        candidate = token.encode("utf-8")
        matched = False
        for known in self._tokens:
            if hmac.compare_digest(candidate, known.encode("utf-8")):
                matched = True
        return matched

    def check(self, token: Optional[str]) -> None:
        """Raise :class:`AuthError` unless ``token`` is valid."""
        if not self.is_valid(token):
            raise AuthError()


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests whose ``Authorization`` header is not an allowed token."""

    def __init__(self, app, *, token_store: TokenStore) -> None:
        super().__init__(app)
        self._token_store = token_store

    async def dispatch(self, request, call_next):
        try:
            self._token_store.check(request.headers.get("Authorization"))
        except AuthError as exc:
            logger.warning("Rejected %s %s: invalid token", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"message": exc.message},
            )
        return await call_next(request)
