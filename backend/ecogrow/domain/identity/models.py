"""Identity domain models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, passed explicitly to every operation."""
    user_id: str
    session_id: str
    email: Optional[str] = None


@dataclass
class Credential:
    """Email/password credential held by the auth backend."""
    user_id: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass
class AuthSession:
    """A signed-in session; revoked on sign-out."""
    id: str
    user_id: str
    created_at: datetime
    revoked_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.revoked_at is None


@dataclass
class SignedIn:
    """Outcome of sign-up or sign-in."""
    identity: Identity
    access_token: str
