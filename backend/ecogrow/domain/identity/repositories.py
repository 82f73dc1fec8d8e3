"""Auth repository protocol."""
from datetime import datetime
from typing import Optional, Protocol

from ecogrow.domain.identity.models import AuthSession, Credential


class AuthRepository(Protocol):
    """Credentials and sessions of the auth backend."""

    async def create_credential(self, credential: Credential) -> Credential:
        """Store a credential; a taken email raises ConflictError."""
        ...

    async def get_credential_by_email(self, email: str) -> Optional[Credential]:
        """Look a credential up by (case-insensitive) email."""
        ...

    async def create_session(self, session: AuthSession) -> AuthSession:
        """Open a session."""
        ...

    async def get_session(self, session_id: str) -> Optional[AuthSession]:
        """Fetch a session by id."""
        ...

    async def revoke_session(self, session_id: str, revoked_at: datetime) -> None:
        """Mark a session revoked."""
        ...
