import logging
import re

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.aadhaar import AadhaarVerification
from app.schemas.aadhaar import AADHAAR_NUMBER_PATTERN, AadhaarStatusEnum, AadhaarSubmission
from app.utils.errors import AlreadySubmitted, BadRequest, DuplicateAadhaarNumber, MissingField, NotFound

logger = logging.getLogger(__name__)


def ensure_can_submit(db: Session, user_id: int, aadhaar_number: str | None) -> None:
    """Reject a submission early, before any images are stored."""
    if not aadhaar_number:
        raise MissingField("Aadhaar number is required")
    if not re.fullmatch(AADHAAR_NUMBER_PATTERN, aadhaar_number):
        raise BadRequest("Invalid Aadhaar number")
    existing = (
        db.query(AadhaarVerification.id)
        .filter(
            or_(
                AadhaarVerification.user_id == user_id,
                AadhaarVerification.aadhaar_number == aadhaar_number,
            )
        )
        .first()
    )
    if existing:
        logger.info("Aadhaar submission rejected for user_id=%s, record exists", user_id)
        raise AlreadySubmitted()


def submit_verification(
    db: Session,
    user_id: int,
    aadhaar_number: str | None,
    front_image_url: str | None,
    back_image_url: str | None,
) -> AadhaarVerification:
    if not aadhaar_number:
        raise MissingField("Aadhaar number is required")
    if not front_image_url or not back_image_url:
        raise MissingField("Both images are required")

    submission = AadhaarSubmission(
        user_id=user_id,
        aadhaar_number=aadhaar_number,
        front_image_url=front_image_url,
        back_image_url=back_image_url,
    )
    ensure_can_submit(db, user_id, submission.aadhaar_number)

    record = AadhaarVerification(**submission.model_dump(), status=AadhaarStatusEnum.pending.value)
    db.add(record)
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent submission; the unique constraints decide
        db.rollback()
        if db.query(AadhaarVerification.id).filter(AadhaarVerification.user_id == user_id).first():
            raise AlreadySubmitted() from exc
        raise DuplicateAadhaarNumber() from exc
    db.refresh(record)

    logger.info("Aadhaar verification id=%s submitted for user_id=%s", record.id, user_id)
    return record


def get_verification_status(db: Session, user_id: int) -> str:
    record = db.query(AadhaarVerification).filter(AadhaarVerification.user_id == user_id).first()
    if not record:
        raise NotFound("Aadhaar verification record not found")
    return record.status
