"""Auth backend database models: credentials and sessions."""
from sqlalchemy import Column, DateTime, String

from ecogrow.domain.common.types import utcnow
from ecogrow.domain.identity.models import AuthSession, Credential
from ecogrow.infra.db.base import Base


class CredentialModel(Base):
    """Email/password credential."""

    __tablename__ = "auth_credentials"

    user_id = Column(String, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_entity(self) -> Credential:
        """Convert to domain entity."""
        return Credential(
            user_id=self.user_id,
            email=self.email,
            password_hash=self.password_hash,
            created_at=self.created_at,
        )


class AuthSessionModel(Base):
    """Signed-in session."""

    __tablename__ = "auth_sessions"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    revoked_at = Column(DateTime, nullable=True)

    def to_entity(self) -> AuthSession:
        """Convert to domain entity."""
        return AuthSession(
            id=self.id,
            user_id=self.user_id,
            created_at=self.created_at,
            revoked_at=self.revoked_at,
        )
