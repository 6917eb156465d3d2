"""Two-phase registration: an emailed one-time code gates account creation.

Pending codes live in the ``pending_otps`` table keyed by email, so every app
instance that shares the database sees the same state. A code is consumed with a
single conditional ``DELETE``; when two verifications race, only one of them
removes the row and the other is rejected.
"""
import logging
import secrets
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.pending_otp import PendingOtp
from app.models.user import User
from app.schemas.user import RegisterRequest
from app.services.auth_service import hash_password
from app.services.email_services import send_email_otp
from app.utils.errors import DuplicateAccount, InvalidOrExpiredOtp, OtpAlreadyPending

logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999


def generate_otp() -> str:
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def request_registration_otp(db: Session, registration: RegisterRequest) -> None:
    """Store a fresh code for the registration email and send it out."""
    email = str(registration.email)
    now = datetime.utcnow()

    if db.query(User).filter(User.username == registration.username).first():
        logger.info("Registration rejected, %s already has an account", email)
        raise DuplicateAccount()

    pending = db.query(PendingOtp).filter(PendingOtp.email == email).first()
    if pending:
        if pending.expires_at > now:
            logger.info("Registration rejected, OTP already pending for %s", email)
            raise OtpAlreadyPending()
        logger.info("Replacing expired OTP for %s", email)
        db.delete(pending)
        db.flush()

    otp = generate_otp()
    db.add(
        PendingOtp(
            email=email,
            code=otp,
            expires_at=now + timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
        )
    )
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise OtpAlreadyPending() from exc

    try:
        send_email_otp(email, otp)
    except Exception:
        logger.exception("Failed to send registration OTP to %s", email)
        db.query(PendingOtp).filter(PendingOtp.email == email, PendingOtp.code == otp).delete(
            synchronize_session=False
        )
        db.commit()
        raise


def verify_registration_otp(db: Session, registration: RegisterRequest) -> User:
    """Consume the pending code and create the account."""
    email = str(registration.email)
    if not registration.otp:
        raise InvalidOrExpiredOtp()

    consumed = (
        db.query(PendingOtp)
        .filter(
            PendingOtp.email == email,
            PendingOtp.code == registration.otp,
            PendingOtp.expires_at > datetime.utcnow(),
        )
        .delete(synchronize_session=False)
    )
    if not consumed:
        db.rollback()
        logger.info("OTP verification failed for %s", email)
        raise InvalidOrExpiredOtp()

    user = User(**registration.user_fields(), password=hash_password(registration.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateAccount() from exc
    db.refresh(user)

    logger.info("Registered user id=%s for %s", user.id, email)
    return user
