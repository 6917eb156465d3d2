import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.user import LoginRequest, RegisterRequest, UserResponse
from app.services.auth_middleware import login_session, logout_session
from app.services.auth_service import authenticate_user
from app.services.otp_service import request_registration_otp, verify_registration_otp
from app.utils.errors import InvalidCredentials
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api", tags=["Auth"])
logger = logging.getLogger(__name__)


# Phase 1 sends the OTP, phase 2 verifies it and creates the account
@router.post("/register")
def register(body: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    try:
        if not body.is_verifying_otp:
            logger.info("OTP requested for registration of %s", body.email)
            request_registration_otp(db, body)
            return create_response(
                message="OTP sent to your email",
                data={"email": body.email},
                status_code=status.HTTP_200_OK,
            )

        logger.info("Verifying registration OTP for %s", body.email)
        user = verify_registration_otp(db, body)
        login_session(request, user)
        return create_response(
            message="Registration successful",
            data=UserResponse.model_validate(user).model_dump(),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.post("/login")
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    try:
        user = authenticate_user(db, body.username, body.password)
        if not user:
            logger.warning("Failed login for username=%s", body.username)
            raise InvalidCredentials()
        login_session(request, user)
        logger.info("User %s logged in", user.id)
        return create_response(
            message="Login successful",
            data=UserResponse.model_validate(user).model_dump(),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.post("/logout")
def logout(request: Request):
    try:
        logout_session(request)
        return create_response(message="Logout successful", data=None, status_code=status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc)
