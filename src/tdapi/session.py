"""Bearer token session lifecycle.

Holds the current access token for a client, decides whether it is still
usable from the ``exp`` claim embedded in the JWT, and exchanges the
configured credentials for a new token when it is not.
"""

import base64
import json
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any, TypeAlias

import structlog

from .credentials import Credentials

logger = structlog.get_logger(__name__)

# Posts the form body to the given endpoint and returns the raw token string.
Exchange: TypeAlias = Callable[[str, dict[str, str]], str]


def decode_token_claims(token: str) -> dict[str, Any] | None:
    """Decode the claims segment of a JWT without verifying its signature.

    Args:
        token: The raw JWT string (header.payload.signature).

    Returns:
        The claims dictionary, or None if the token is not a decodable JWT.
    """
    parts = token.split(".")
    if len(parts) != 3:  # noqa: PLR2004
        logger.warning("Token does not appear to be a JWT")
        return None

    try:
        # JWT base64url encoding omits padding; restore it
        payload_b64 = parts[1]
        padding = 4 - len(payload_b64) % 4
        if padding != 4:  # noqa: PLR2004
            payload_b64 += "=" * padding

        payload = json.loads(base64.urlsafe_b64decode(payload_b64))
    except (ValueError, json.JSONDecodeError):
        logger.warning("Failed to decode JWT payload")
        return None

    if not isinstance(payload, dict):
        logger.warning("JWT payload is not an object")
        return None
    return payload


def token_expiry(token: str) -> float | None:
    """Return the ``exp`` claim of a token in epoch seconds, if any."""
    claims = decode_token_claims(token)
    if claims is None:
        return None

    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    if not math.isfinite(exp):
        logger.warning("Token expiry claim is not a finite number")
        return None
    return float(exp)


def token_expired(token: str, now: float | None = None) -> bool:
    """Check whether a token must be replaced.

    A token is usable only while its ``exp`` claim lies strictly in the
    future. Tokens without a decodable ``exp`` claim are always expired.
    """
    return Session.from_token(token).expired(now)


@dataclass(frozen=True)
class Session:
    """An access token and the moment it stops being valid."""

    token: str
    expires_at: float | None = None

    @classmethod
    def from_token(cls, token: str) -> "Session":
        return cls(token=token, expires_at=token_expiry(token))

    def expired(self, now: float | None = None) -> bool:
        if self.expires_at is None:
            return True
        now = time.time() if now is None else now
        return self.expires_at <= now


class EmptyTokenError(Exception):
    """Raised when the authentication endpoint returns no token."""


class SessionManager:
    """Owns the session of one client and renews it on demand.

    Callers on any thread use :meth:`obtain_token` before each request.
    Renewal is single-flight: threads that find the session absent or
    expired at the same time share one credential exchange.
    """

    def __init__(self, credentials: Credentials, exchange: Exchange):
        """Initialize the session manager.

        Args:
            credentials: Identity to authenticate as.
            exchange: Transport function that posts a form body to an
                authentication endpoint and returns the raw token.
        """
        self._credentials = credentials
        self._exchange = exchange
        self._lock = Lock()
        self._session: Session | None = None

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def session(self) -> Session | None:
        return self._session

    def obtain_token(self) -> str:
        """Return a valid bearer token, exchanging credentials if needed.

        Returns:
            The held token when it has not expired, otherwise a fresh one.

        Raises:
            EmptyTokenError: If the exchange returns an empty token.
            Exception: Any transport error raised by the exchange is
                propagated unchanged and the held session is kept.
        """
        with self._lock:
            session = self._session
            if session is not None and not session.expired():
                logger.debug(
                    "Using cached token",
                    expires_in_seconds=int(session.expires_at - time.time()),
                )
                return session.token

            endpoint = self._credentials.login_path
            logger.debug("Requesting new token", endpoint=endpoint)
            token = self._exchange(endpoint, self._credentials.form())
            if not token:
                msg = f"Authentication endpoint {endpoint} returned an empty token"
                raise EmptyTokenError(msg)

            self._session = Session.from_token(token)
            if self._session.expires_at is None:
                logger.warning(
                    "Token has no expiry claim, it will be renewed on every request",
                )
            else:
                logger.info(
                    "Obtained new token",
                    expires_in_seconds=int(self._session.expires_at - time.time()),
                )
            return token
