import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.aadhaar import AadhaarVerificationResponse
from app.services.aadhaar_service import ensure_can_submit, get_verification_status, submit_verification
from app.services.auth_middleware import get_current_user
from app.utils.errors import MissingField
from app.utils.response import create_response, handle_exception
from app.utils.uploads import save_image_uploads

router = APIRouter(prefix="/api", tags=["Aadhaar"])
logger = logging.getLogger(__name__)

AADHAAR_FOLDER = "aadhaar"


@router.post("/verify-aadhaar")
async def verify_aadhaar(
    aadhaar_number: str | None = Form(None, alias="aadhaarNumber"),
    aadhaar_front: UploadFile | None = File(None, alias="aadhaarFront"),
    aadhaar_back: UploadFile | None = File(None, alias="aadhaarBack"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("Processing Aadhaar verification for user %s", current_user.id)
        if not aadhaar_number:
            raise MissingField("Aadhaar number is required")
        if aadhaar_front is None or aadhaar_back is None:
            raise MissingField("Both images are required")

        ensure_can_submit(db, current_user.id, aadhaar_number)
        front_url, back_url = await save_image_uploads(
            [aadhaar_front, aadhaar_back], AADHAAR_FOLDER, current_user.id
        )

        record = submit_verification(db, current_user.id, aadhaar_number, front_url, back_url)
        return create_response(
            message="Aadhaar submitted for verification",
            data=AadhaarVerificationResponse.model_validate(record).model_dump(),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/aadhaar-verification-status")
def aadhaar_verification_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("Fetching Aadhaar verification status for user %s", current_user.id)
        verification_status = get_verification_status(db, current_user.id)
        return create_response(
            message="Aadhaar verification status fetched successfully",
            data={"status": verification_status},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
