"""Sign-up, sign-in, sign-out and the current user."""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, EmailStr

from ecogrow.api.deps import (
    get_current_identity,
    get_current_profile,
    get_profile_service,
    get_session_service,
)
from ecogrow.api.schemas import NoticeResponse, ProfileResponse
from ecogrow.domain.identity.models import Identity, SignedIn
from ecogrow.domain.identity.services import SessionService
from ecogrow.domain.navigation.views import default_view, view_after_sign_out
from ecogrow.domain.profile.models import Profile
from ecogrow.domain.profile.services import ProfileService

router = APIRouter()


class SignUpRequest(BaseModel):
    """Sign-up request."""
    email: EmailStr
    password: str
    full_name: str
    location: Optional[str] = None


class SignInRequest(BaseModel):
    """Sign-in request."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Bearer token for the new session."""
    access_token: str
    token_type: str = "bearer"
    user_id: str
    next_view: str


class SignOutResponse(BaseModel):
    next_view: str
    notice: NoticeResponse


class MeResponse(BaseModel):
    """Signed-in user with profile and role."""
    user_id: str
    email: Optional[str]
    is_admin: bool
    profile: ProfileResponse


def _token_response(signed_in: SignedIn) -> TokenResponse:
    return TokenResponse(
        access_token=signed_in.access_token,
        user_id=signed_in.identity.user_id,
        next_view=default_view(signed_in=True).value,
    )


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    session_service: SessionService = Depends(get_session_service),
):
    """Register with email and password; creates an empty profile."""
    signed_in = await session_service.sign_up(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        location=request.location,
    )
    return _token_response(signed_in)


@router.post("/signin", response_model=TokenResponse)
async def sign_in(
    request: SignInRequest,
    session_service: SessionService = Depends(get_session_service),
):
    signed_in = await session_service.sign_in(request.email, request.password)
    return _token_response(signed_in)


@router.post("/login", response_model=TokenResponse)
async def login(
    form: OAuth2PasswordRequestForm = Depends(),
    session_service: SessionService = Depends(get_session_service),
):
    """OAuth2 password form variant of sign-in (username is the email)."""
    signed_in = await session_service.sign_in(form.username, form.password)
    return _token_response(signed_in)


@router.post("/signout", response_model=SignOutResponse)
async def sign_out(
    identity: Identity = Depends(get_current_identity),
    session_service: SessionService = Depends(get_session_service),
):
    await session_service.sign_out(identity)
    return SignOutResponse(
        next_view=view_after_sign_out().value,
        notice=NoticeResponse(message="Signed out successfully"),
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    profile: Profile = Depends(get_current_profile),
    profile_service: ProfileService = Depends(get_profile_service),
):
    return MeResponse(
        user_id=identity.user_id,
        email=identity.email,
        is_admin=await profile_service.is_admin(identity.user_id),
        profile=ProfileResponse.from_entity(profile),
    )
