"""Auth repository implementation."""
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.common.errors import ConflictError
from ecogrow.domain.identity.models import AuthSession, Credential
from ecogrow.domain.identity.repositories import AuthRepository
from ecogrow.infra.db.models.auth import AuthSessionModel, CredentialModel


class AuthRepositoryImpl(AuthRepository):
    """Auth repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_credential(self, credential: Credential) -> Credential:
        """Store a credential. A taken email raises ConflictError."""
        model = CredentialModel(
            user_id=credential.user_id,
            email=credential.email,
            password_hash=credential.password_hash,
            created_at=credential.created_at,
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Email already registered") from e
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return model.to_entity()

    async def get_credential_by_email(self, email: str) -> Optional[Credential]:
        """Look a credential up by email, ignoring case."""
        result = await self.session.execute(
            select(CredentialModel).where(func.lower(CredentialModel.email) == email.lower())
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def create_session(self, session: AuthSession) -> AuthSession:
        """Open a session."""
        model = AuthSessionModel(
            id=session.id,
            user_id=session.user_id,
            created_at=session.created_at,
            revoked_at=session.revoked_at,
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return model.to_entity()

    async def get_session(self, session_id: str) -> Optional[AuthSession]:
        """Fetch a session by id."""
        result = await self.session.execute(select(AuthSessionModel).where(AuthSessionModel.id == session_id))
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def revoke_session(self, session_id: str, revoked_at: datetime) -> None:
        """Mark a session revoked."""
        try:
            await self.session.execute(
                update(AuthSessionModel)
                .where(AuthSessionModel.id == session_id)
                .values(revoked_at=revoked_at)
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
