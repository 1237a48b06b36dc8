# superchat/api/auth.py

from fastapi import APIRouter, Depends

from superchat.api.dependencies import get_auth_interactor, get_current_user
from superchat.domain.entities import Principal
from superchat.infrastructure import schemas
from superchat.interactors.auth_interactor import AuthInteractor

router = APIRouter()


@router.post("/signup", response_model=schemas.Envelope)
async def signup(
    request: schemas.SignupRequest,
    auth_interactor: AuthInteractor = Depends(get_auth_interactor),
):
    issued = await auth_interactor.request_signup_otp(request.phone_number)
    return schemas.Envelope(message="OTP sent successfully", data=issued)


@router.post("/login", response_model=schemas.Envelope)
async def login(
    request: schemas.LoginRequest,
    auth_interactor: AuthInteractor = Depends(get_auth_interactor),
):
    issued = await auth_interactor.request_login_otp(request.phone_number)
    return schemas.Envelope(message="OTP sent successfully", data=issued)


@router.post("/verify-otp", response_model=schemas.Envelope)
async def verify_otp(
    request: schemas.VerifyOtpRequest,
    auth_interactor: AuthInteractor = Depends(get_auth_interactor),
):
    session_token = await auth_interactor.verify_otp(request)
    return schemas.Envelope(message="OTP verified successfully", data=session_token)


@router.post("/logout", response_model=schemas.Envelope)
async def logout(
    current_user: Principal = Depends(get_current_user),
    auth_interactor: AuthInteractor = Depends(get_auth_interactor),
):
    await auth_interactor.logout(current_user.token)
    return schemas.Envelope(message="Logged out successfully")
