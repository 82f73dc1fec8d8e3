"""Tests for sign-up, sign-in, sign-out and token resolution."""
from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.common.errors import AuthenticationError, ConflictError, RemoteCallError, ValidationError
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.identity.services import SessionService
from ecogrow.infra.db.repositories import AuthRepositoryImpl, ProfileRepositoryImpl
from ecogrow.infra.security.jwt import create_access_token, decode_token
from ecogrow.infra.security.password import get_password_hash, verify_password

from fakes import FailingRepo


@pytest.fixture
def session_service(db_session: AsyncSession) -> SessionService:
    return SessionService(
        auth_repo=AuthRepositoryImpl(db_session),
        profile_repo=ProfileRepositoryImpl(db_session),
        hash_password=get_password_hash,
        verify_password=verify_password,
        issue_token=create_access_token,
    )


class TestSignUp:
    """Registration creates a credential and an empty profile."""

    async def test_sign_up_creates_profile(self, db_session: AsyncSession, session_service: SessionService):
        signed_in = await session_service.sign_up("Grower@Example.com", "secret123", " Gina Grower ", "Bandung")

        profile = await ProfileRepositoryImpl(db_session).get_by_id(signed_in.identity.user_id)
        assert profile.full_name == "Gina Grower"
        assert profile.location == "Bandung"
        assert profile.eco_coins == 0
        assert profile.badges == []
        assert signed_in.identity.email == "grower@example.com"

    async def test_duplicate_email(self, session_service: SessionService):
        await session_service.sign_up("dup@example.com", "secret123", "First")
        with pytest.raises(ConflictError):
            await session_service.sign_up("DUP@example.com", "secret456", "Second")

    async def test_concurrent_duplicate_email_is_conflict(self, db_session: AsyncSession, session_service: SessionService):
        class StaleLookupAuthRepo(AuthRepositoryImpl):
            """Misses the other sign-up, as a concurrent request would."""

            async def get_credential_by_email(self, email):
                return None

        session_service.auth_repo = StaleLookupAuthRepo(db_session)
        first = await session_service.sign_up("race@example.com", "secret123", "First")

        with pytest.raises(ConflictError) as exc:
            await session_service.sign_up("race@example.com", "secret456", "Second")

        assert exc.value.message == "Email already registered"
        stored = await AuthRepositoryImpl(db_session).get_credential_by_email("race@example.com")
        assert stored.user_id == first.identity.user_id

    async def test_short_password(self, session_service: SessionService):
        with pytest.raises(ValidationError) as exc:
            await session_service.sign_up("short@example.com", "12345", "Shorty")
        assert exc.value.message == "Password must be at least 6 characters"

    async def test_blank_name(self, session_service: SessionService):
        with pytest.raises(ValidationError):
            await session_service.sign_up("noname@example.com", "secret123", "  ")


class TestSessions:
    """Tokens resolve to identities only while their session is live."""

    async def test_sign_in_and_resolve(self, session_service: SessionService):
        created = await session_service.sign_up("me@example.com", "secret123", "Me")

        signed_in = await session_service.sign_in("ME@example.com", "secret123")
        identity = await session_service.current_identity(decode_token(signed_in.access_token))

        assert identity.user_id == created.identity.user_id
        assert identity.session_id == signed_in.identity.session_id
        assert identity.session_id != created.identity.session_id

    async def test_wrong_password(self, session_service: SessionService):
        await session_service.sign_up("me@example.com", "secret123", "Me")
        with pytest.raises(AuthenticationError) as exc:
            await session_service.sign_in("me@example.com", "wrong-pass")
        assert exc.value.message == "Invalid login credentials"

    async def test_unknown_email(self, session_service: SessionService):
        with pytest.raises(AuthenticationError):
            await session_service.sign_in("ghost@example.com", "secret123")

    async def test_sign_out_revokes_only_that_session(self, session_service: SessionService):
        first = await session_service.sign_up("me@example.com", "secret123", "Me")
        second = await session_service.sign_in("me@example.com", "secret123")

        await session_service.sign_out(first.identity)

        with pytest.raises(AuthenticationError):
            await session_service.current_identity(decode_token(first.access_token))
        still_live = await session_service.current_identity(decode_token(second.access_token))
        assert still_live.user_id == first.identity.user_id

    async def test_sign_out_failure_is_reported(self, db_session: AsyncSession, session_service: SessionService):
        signed_in = await session_service.sign_up("me@example.com", "secret123", "Me")
        session_service.auth_repo = FailingRepo(AuthRepositoryImpl(db_session), "revoke_session")

        with pytest.raises(RemoteCallError) as exc:
            await session_service.sign_out(signed_in.identity)
        assert exc.value.message == "Failed to sign out"

    async def test_missing_claims(self, session_service: SessionService):
        with pytest.raises(AuthenticationError):
            await session_service.current_identity(None)
        with pytest.raises(AuthenticationError):
            await session_service.current_identity({"sub": "someone"})

    async def test_session_of_another_user(self, session_service: SessionService):
        mine = await session_service.sign_up("me@example.com", "secret123", "Me")
        with pytest.raises(AuthenticationError):
            await session_service.current_identity({"sub": "someone-else", "sid": mine.identity.session_id})


class TestTokensAndPasswords:
    """JWT and bcrypt helpers."""

    def test_token_round_trip_claims(self):
        token = create_access_token(Identity(user_id="user-1", session_id="sess-1", email="a@b.c"))
        claims = decode_token(token)
        assert claims["sub"] == "user-1"
        assert claims["sid"] == "sess-1"
        assert claims["aud"] == "authenticated"
        assert claims["email"] == "a@b.c"

    def test_expired_token(self):
        token = create_access_token(Identity(user_id="u", session_id="s"), expires_delta=timedelta(seconds=-10))
        assert decode_token(token) is None

    def test_garbage_token(self):
        assert decode_token("not-a-jwt") is None

    def test_password_hashing(self):
        hashed = get_password_hash("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed) is True
        assert verify_password("secret124", hashed) is False
