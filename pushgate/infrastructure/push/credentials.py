"""OAuth2 access tokens for the structured messaging channel.

The service account signs an RS256 JWT assertion which is exchanged for a
short-lived bearer token using the RFC 7523 ``jwt-bearer`` grant.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone

import requests
from jose import jwt
from jose.exceptions import JOSEError

from pushgate.domain.entities import AccessCredential, ServiceAccountIdentity
from pushgate.domain.exceptions import (
    CredentialSigningError,
    PushConfigurationError,
    TokenExchangeError,
)

from .config import PushChannelConfig

logger = logging.getLogger(__name__)

MESSAGING_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
JWT_BEARER_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME_SECONDS = 3600
_MAX_EXCHANGE_ATTEMPTS = 2
_LOGGED_BODY_LIMIT = 500


class CredentialCache:
    """Thread-safe in-memory store of access tokens keyed by signing identity."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, AccessCredential] = {}

    def get(self, key: str, *, margin_seconds: int, now: datetime | None = None) -> AccessCredential | None:
        with self._lock:
            credential = self._entries.get(key)
            if credential is None:
                return None
            if not credential.is_usable(margin_seconds=margin_seconds, now=now):
                del self._entries[key]
                return None
            return credential

    def store(self, key: str, credential: AccessCredential) -> None:
        with self._lock:
            self._entries[key] = credential

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


credential_cache = CredentialCache()


def build_assertion(
    identity: ServiceAccountIdentity,
    *,
    audience: str,
    issued_at: int,
) -> str:
    """Return the signed JWT assertion for ``identity``."""

    claims = {
        "iss": identity.client_email,
        "scope": MESSAGING_SCOPE,
        "aud": audience,
        "iat": issued_at,
        "exp": issued_at + ASSERTION_LIFETIME_SECONDS,
    }
    headers = {"kid": identity.private_key_id} if identity.private_key_id else None
    # Keys pasted into environment variables often carry escaped newlines.
    private_key = identity.private_key.replace("\\n", "\n")
    try:
        return jwt.encode(claims, private_key, algorithm="RS256", headers=headers)
    except (JOSEError, ValueError, TypeError) as exc:
        raise CredentialSigningError(f"Unable to sign token assertion: {exc}") from exc


class CredentialMinter:
    """Mint bearer credentials for the structured channel."""

    def __init__(
        self,
        config: PushChannelConfig,
        *,
        cache: CredentialCache | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._cache = cache if cache is not None else credential_cache
        self._clock = clock

    def mint(self, identity: ServiceAccountIdentity | None) -> AccessCredential:
        """Return a usable credential for ``identity``.

        Raises :class:`PushConfigurationError`, :class:`CredentialSigningError`
        or :class:`TokenExchangeError`.
        """

        if identity is None:
            raise PushConfigurationError("Structured channel signing identity is not configured")

        now = self._clock()
        if self._config.cache_credentials:
            cached = self._cache.get(
                identity.client_email,
                margin_seconds=self._config.credential_refresh_margin,
                now=datetime.fromtimestamp(now, tz=timezone.utc),
            )
            if cached is not None:
                logger.debug("Reusing cached access token for %s", identity.client_email)
                return cached

        issued_at = int(now)
        assertion = build_assertion(
            identity, audience=self._config.token_endpoint, issued_at=issued_at
        )
        credential = self._exchange(assertion, issued_at=issued_at)
        if self._config.cache_credentials:
            self._cache.store(identity.client_email, credential)
        logger.info(
            "Minted access token for %s valid until %s",
            identity.client_email,
            credential.expires_at.isoformat(),
        )
        return credential

    def _exchange(self, assertion: str, *, issued_at: int) -> AccessCredential:
        last_error: TokenExchangeError | None = None
        for attempt in range(1, _MAX_EXCHANGE_ATTEMPTS + 1):
            try:
                response = requests.post(
                    self._config.token_endpoint,
                    data={"grant_type": JWT_BEARER_GRANT_TYPE, "assertion": assertion},
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=self._config.request_timeout,
                )
            except requests.RequestException as exc:
                last_error = TokenExchangeError(f"Token endpoint unreachable: {exc}")
                logger.warning("Token exchange attempt %s failed: %s", attempt, exc)
                continue

            if response.status_code >= 500:
                last_error = self._error_from_response(response)
                logger.warning(
                    "Token exchange attempt %s failed with status %s",
                    attempt,
                    response.status_code,
                )
                continue
            if not 200 <= response.status_code < 300:
                raise self._error_from_response(response)
            return self._credential_from_response(response, issued_at=issued_at)

        raise last_error or TokenExchangeError("Token exchange failed")

    @staticmethod
    def _error_from_response(response: requests.Response) -> TokenExchangeError:
        body = response.text or ""
        logger.error(
            "Token endpoint responded with status %s: %s",
            response.status_code,
            body[:_LOGGED_BODY_LIMIT],
        )
        return TokenExchangeError(
            f"Failed to get access token: {body}",
            status_code=response.status_code,
            body=body,
        )

    @staticmethod
    def _credential_from_response(response: requests.Response, *, issued_at: int) -> AccessCredential:
        try:
            payload = response.json()
        except ValueError as exc:
            raise TokenExchangeError(
                "Token endpoint returned a non JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise TokenExchangeError(
                "Token endpoint response did not include an access token",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            expires_in = int(payload.get("expires_in", ASSERTION_LIFETIME_SECONDS))
        except (TypeError, ValueError):
            expires_in = ASSERTION_LIFETIME_SECONDS
        expires_at = datetime.fromtimestamp(issued_at + expires_in, tz=timezone.utc)
        return AccessCredential(token=str(token), expires_at=expires_at)


__all__ = [
    "ASSERTION_LIFETIME_SECONDS",
    "CredentialCache",
    "CredentialMinter",
    "JWT_BEARER_GRANT_TYPE",
    "MESSAGING_SCOPE",
    "build_assertion",
    "credential_cache",
]
