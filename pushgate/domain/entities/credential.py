"""Domain entities describing delivery credentials."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from pushgate.domain.exceptions import PushConfigurationError


@dataclass(frozen=True)
class ServiceAccountIdentity:
    """Signing identity used to mint structured channel access tokens."""

    client_email: str
    private_key: str
    project_id: str | None = None
    private_key_id: str | None = None

    @classmethod
    def from_json(cls, raw: str | None) -> "ServiceAccountIdentity":
        """Parse a service account JSON document.

        Raises :class:`PushConfigurationError` when the document is absent,
        malformed or lacks the signing fields.
        """

        if not raw or not raw.strip():
            raise PushConfigurationError("Service account is not configured")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PushConfigurationError("Service account is not valid JSON") from exc
        if not isinstance(data, dict):
            raise PushConfigurationError("Service account must be a JSON object")

        client_email = str(data.get("client_email") or "").strip()
        private_key = str(data.get("private_key") or "")
        if not client_email or not private_key.strip():
            raise PushConfigurationError(
                "Service account must define client_email and private_key"
            )
        return cls(
            client_email=client_email,
            private_key=private_key,
            project_id=(str(data["project_id"]).strip() or None)
            if data.get("project_id")
            else None,
            private_key_id=data.get("private_key_id") or None,
        )


@dataclass(frozen=True)
class AccessCredential:
    """Bearer token issued by the token endpoint."""

    token: str
    expires_at: datetime

    def is_usable(self, *, margin_seconds: int = 0, now: datetime | None = None) -> bool:
        """Return ``True`` while the token is valid beyond ``margin_seconds``."""

        current = now or datetime.now(tz=timezone.utc)
        return current + timedelta(seconds=margin_seconds) < self.expires_at


__all__ = ["AccessCredential", "ServiceAccountIdentity"]
