"""API dependencies."""
import random
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ecogrow.domain.admin.services import AdminService
from ecogrow.domain.common.errors import AuthenticationError
from ecogrow.domain.dashboard.services import DashboardService
from ecogrow.domain.identity.models import Identity
from ecogrow.domain.identity.services import SessionService
from ecogrow.domain.market.services import MarketService
from ecogrow.domain.profile.models import Profile
from ecogrow.domain.profile.services import ProfileService
from ecogrow.domain.scan.services import ScanService
from ecogrow.infra.db.repositories import (
    AuthRepositoryImpl,
    MarketplaceItemRepositoryImpl,
    OrderRepositoryImpl,
    ProfileRepositoryImpl,
    RoleRepositoryImpl,
    TreeRepositoryImpl,
)
from ecogrow.infra.db.session import get_db
from ecogrow.infra.security.jwt import create_access_token, decode_token
from ecogrow.infra.security.password import get_password_hash, verify_password
from ecogrow.settings import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/v1/auth/login", auto_error=False)

_scan_rng: Optional[random.Random] = None


def get_scan_rng() -> random.Random:
    """One generator per process, seeded from settings.scan_seed when set."""
    global _scan_rng
    if _scan_rng is None:
        _scan_rng = random.Random(settings.scan_seed)
    return _scan_rng


def get_session_service(db: AsyncSession = Depends(get_db)) -> SessionService:
    return SessionService(
        auth_repo=AuthRepositoryImpl(db),
        profile_repo=ProfileRepositoryImpl(db),
        hash_password=get_password_hash,
        verify_password=verify_password,
        issue_token=create_access_token,
    )


def get_profile_service(db: AsyncSession = Depends(get_db)) -> ProfileService:
    return ProfileService(ProfileRepositoryImpl(db), RoleRepositoryImpl(db))


def get_scan_service(
    db: AsyncSession = Depends(get_db),
    rng: random.Random = Depends(get_scan_rng),
) -> ScanService:
    return ScanService(TreeRepositoryImpl(db), ProfileRepositoryImpl(db), rng=rng)


def get_market_service(db: AsyncSession = Depends(get_db)) -> MarketService:
    return MarketService(
        MarketplaceItemRepositoryImpl(db),
        OrderRepositoryImpl(db),
        ProfileRepositoryImpl(db),
    )


def get_dashboard_service(db: AsyncSession = Depends(get_db)) -> DashboardService:
    return DashboardService(TreeRepositoryImpl(db), ProfileRepositoryImpl(db))


def get_admin_service(
    db: AsyncSession = Depends(get_db),
    profile_service: ProfileService = Depends(get_profile_service),
) -> AdminService:
    return AdminService(
        profile_service=profile_service,
        order_repo=OrderRepositoryImpl(db),
        item_repo=MarketplaceItemRepositoryImpl(db),
        profile_repo=ProfileRepositoryImpl(db),
        role_repo=RoleRepositoryImpl(db),
    )


async def get_optional_identity(
    token: Optional[str] = Depends(oauth2_scheme),
    session_service: SessionService = Depends(get_session_service),
) -> Optional[Identity]:
    """The signed-in identity, or None for anonymous callers."""
    if not token:
        return None
    try:
        return await session_service.current_identity(decode_token(token))
    except AuthenticationError:
        return None


async def get_current_identity(
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> Identity:
    """The signed-in identity; anonymous callers get 401."""
    if identity is None:
        raise AuthenticationError()
    return identity


async def get_current_profile(
    identity: Identity = Depends(get_current_identity),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Profile:
    """Profile of the signed-in user, loaded at the start of the request."""
    profile = await profile_service.load_profile(identity.user_id)
    if profile is None:
        raise AuthenticationError("Profile not found for the signed-in user")
    return profile
