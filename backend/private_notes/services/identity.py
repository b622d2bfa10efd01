"""
Private Notes Backend — Identity Verifier
==========================================

What:  Turns a bearer access token into an Identity by asking the external
       identity provider.
How:   `IdentityVerifier` is the abstract contract; `HttpIdentityVerifier`
       implements it against a GoTrue-compatible `GET /auth/v1/user` endpoint
       (the shape Supabase Auth exposes) using httpx.
Who:   Called by the authentication gate (private_notes.auth) on every request.

The backend never issues or stores credentials and keeps no session cache:
every request costs one verification call.

Verification outcomes:
    200 with a user object      → Identity
    401 / 403                   → None (token unknown, expired or revoked)
    any other non-2xx status    → IdentityVerificationError
    transport failures, bad JSON → propagate as-is (the gate maps them to
                                   401 "Authentication failed")
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from private_notes.config import settings
from private_notes.exceptions import IdentityVerificationError
from private_notes.schemas.note import Identity

logger = logging.getLogger(__name__)


class IdentityVerifier(ABC):
    """
    Abstract interface for bearer-token verification.

    Contract:
        - verify() returns the Identity for a valid token, None otherwise
        - provider-reported failures raise IdentityVerificationError
    """

    @abstractmethod
    async def verify(self, token: str) -> Optional[Identity]:
        """Resolve `token` to an Identity, or None if the provider does not accept it."""
        ...

    async def aclose(self) -> None:
        """Release any held resources (HTTP connections)."""
        return None


class HttpIdentityVerifier(IdentityVerifier):
    """
    Verifies tokens against `{base_url}{user_path}`.

    The httpx.AsyncClient is created lazily and reused across requests;
    `aclose()` is called from the app lifespan on shutdown.
    """

    REJECTED_STATUSES = {401, 403}

    def __init__(
        self,
        base_url: str,
        api_key: str,
        user_path: str = "/auth/v1/user",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.user_path = user_path
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def verify(self, token: str) -> Optional[Identity]:
        response = await self.client.get(
            self.user_path,
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {token}",
            },
        )

        if response.status_code in self.REJECTED_STATUSES:
            logger.debug("Identity provider rejected token (HTTP %d)", response.status_code)
            return None

        if response.is_error:
            raise IdentityVerificationError(
                message=f"Identity provider returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        payload = response.json()
        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not user_id:
            return None

        return Identity(id=str(user_id), email=payload.get("email"))

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# ── Singleton Instance ────────────────────────────────────────────────────
identity_verifier = HttpIdentityVerifier(
    base_url=settings.identity_url,
    api_key=settings.identity_api_key,
    user_path=settings.identity_user_path,
    timeout=settings.identity_timeout,
)


def get_identity_verifier() -> IdentityVerifier:
    """FastAPI dependency returning the process-wide verifier (overridable in tests)."""
    return identity_verifier
