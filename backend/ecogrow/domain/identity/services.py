"""Session/identity adapter: sign-up, sign-in, sign-out and current identity."""
import logging
from typing import Callable, Optional

from ecogrow.domain.common.errors import (
    AuthenticationError,
    ConflictError,
    RemoteCallError,
    ValidationError,
)
from ecogrow.domain.common.types import generate_id, utcnow
from ecogrow.domain.identity.models import AuthSession, Credential, Identity, SignedIn
from ecogrow.domain.identity.repositories import AuthRepository
from ecogrow.domain.profile.models import Profile
from ecogrow.domain.profile.repositories import ProfileRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Wraps the auth backend; tokens are issued and decoded by injected callables."""

    def __init__(
        self,
        auth_repo: AuthRepository,
        profile_repo: ProfileRepository,
        hash_password: Callable[[str], str],
        verify_password: Callable[[str, str], bool],
        issue_token: Callable[[Identity], str],
    ):
        self.auth_repo = auth_repo
        self.profile_repo = profile_repo
        self.hash_password = hash_password
        self.verify_password = verify_password
        self.issue_token = issue_token

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        location: Optional[str] = None,
    ) -> SignedIn:
        """Create the credential and an empty profile, then sign in."""
        email = email.strip().lower()
        full_name = (full_name or "").strip()
        if not full_name:
            raise ValidationError("Please enter your full name")
        if len(password) < 6:
            raise ValidationError("Password must be at least 6 characters")

        if await self.auth_repo.get_credential_by_email(email):
            raise ConflictError("Email already registered")

        now = utcnow()
        user_id = generate_id()
        await self.auth_repo.create_credential(
            Credential(
                user_id=user_id,
                email=email,
                password_hash=self.hash_password(password),
                created_at=now,
            )
        )
        await self.profile_repo.create(
            Profile(
                id=user_id,
                full_name=full_name,
                location=(location or "").strip() or None,
                eco_coins=0,
                badges=[],
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Signed up user %s", user_id)
        return await self._open_session(user_id, email)

    async def sign_in(self, email: str, password: str) -> SignedIn:
        """Verify the password and open a session."""
        credential = await self.auth_repo.get_credential_by_email(email.strip().lower())
        if credential is None or not self.verify_password(password, credential.password_hash):
            logger.warning("Sign-in failed for %s", email)
            raise AuthenticationError("Invalid login credentials")
        return await self._open_session(credential.user_id, credential.email)

    async def sign_out(self, identity: Identity) -> None:
        """Terminate the caller's session. No retry on failure."""
        try:
            await self.auth_repo.revoke_session(identity.session_id, utcnow())
        except Exception as e:
            logger.error("Sign-out failed for %s: %s", identity.user_id, e)
            raise RemoteCallError("Failed to sign out", operation="auth.sign_out") from e
        logger.info("Signed out user %s (session %s)", identity.user_id, identity.session_id)

    async def current_identity(self, claims: Optional[dict]) -> Identity:
        """Resolve decoded token claims to a live identity, or raise AuthenticationError."""
        if not claims:
            raise AuthenticationError()
        user_id = claims.get("sub")
        session_id = claims.get("sid")
        if not user_id or not session_id:
            raise AuthenticationError()
        session = await self.auth_repo.get_session(session_id)
        if session is None or not session.is_active or session.user_id != user_id:
            raise AuthenticationError()
        return Identity(user_id=user_id, session_id=session_id, email=claims.get("email"))

    async def _open_session(self, user_id: str, email: str) -> SignedIn:
        session = await self.auth_repo.create_session(
            AuthSession(id=generate_id(), user_id=user_id, created_at=utcnow())
        )
        identity = Identity(user_id=user_id, session_id=session.id, email=email)
        return SignedIn(identity=identity, access_token=self.issue_token(identity))
