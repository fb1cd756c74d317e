"""
Prospector - Credential adapter interface.

Sending drafts through a mail provider needs an OAuth token. The core only
sees this narrow capability; the real adapter (browser flow, SDK client)
lives outside. Every call returns an AuthResult instead of flipping shared
"is ready" / "is signed in" flags.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger("prospector.auth")


@dataclass(frozen=True)
class AuthResult:
    ok: bool
    token: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, token: str = None) -> "AuthResult":
        return cls(ok=True, token=token)

    @classmethod
    def failure(cls, error: str) -> "AuthResult":
        return cls(ok=False, error=error)


@runtime_checkable
class CredentialProvider(Protocol):
    async def request_token(self, prompt_consent: bool = False) -> str:
        ...

    async def revoke_token(self, token: str) -> None:
        ...

    def set_credential(self, token: Optional[str]) -> None:
        ...


class AuthSession:
    """Wraps a CredentialProvider and turns its exceptions into AuthResult values."""

    def __init__(self, provider: Optional[CredentialProvider], client_id: str = ""):
        self.provider = provider
        self.client_id = client_id
        self._token: Optional[str] = None

    def initialize(self) -> AuthResult:
        """Report whether sign-in can be attempted at all."""
        if not self.client_id:
            return AuthResult.failure("No OAuth client id configured. Set it in your profile.")
        if self.provider is None:
            return AuthResult.failure("No credential provider available.")
        return AuthResult.success()

    @property
    def token(self) -> Optional[str]:
        return self._token

    async def sign_in(self) -> AuthResult:
        ready = self.initialize()
        if not ready.ok:
            return ready
        try:
            token = await self.provider.request_token(prompt_consent=self._token is None)
        except Exception as e:
            logger.warning("Token request failed: %s", e)
            return AuthResult.failure(f"Authentication error: {e}")
        if not token:
            return AuthResult.failure("Authentication returned no access token.")
        self.provider.set_credential(token)
        self._token = token
        return AuthResult.success(token)

    async def sign_out(self) -> AuthResult:
        if self._token is None:
            return AuthResult.success()
        token, self._token = self._token, None
        self.provider.set_credential(None)
        try:
            await self.provider.revoke_token(token)
        except Exception as e:
            logger.warning("Token revoke failed: %s", e)
            return AuthResult.failure(f"Could not revoke token: {e}")
        return AuthResult.success()
