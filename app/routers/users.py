import logging

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.bicycle import BicycleResponse
from app.schemas.user import PasswordChange, UserResponse
from app.services.auth_middleware import get_current_user
from app.services.auth_service import hash_password, verify_password
from app.services.bicycle_service import list_seller_bicycles
from app.utils.errors import BadRequest, MissingField
from app.utils.response import create_response, handle_exception
from app.utils.uploads import save_image_upload

router = APIRouter(prefix="/api", tags=["Users"])
logger = logging.getLogger(__name__)

PROFILE_FOLDER = "profile"


@router.get("/user")
def get_user(current_user: User = Depends(get_current_user)):
    try:
        return create_response(
            message="User fetched successfully",
            data=UserResponse.model_validate(current_user).model_dump(),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.patch("/profile-password")
def change_password(
    body: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        if not body.current_password or not body.new_password:
            raise BadRequest("Both current and new passwords are required")
        if not verify_password(body.current_password, current_user.password):
            raise BadRequest("Current password is incorrect")

        current_user.password = hash_password(body.new_password)
        db.commit()
        return create_response(
            message="Password updated successfully",
            data=None,
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.patch("/profile-image")
async def update_profile_image(
    image: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        if image is None:
            raise MissingField("Image is required")
        image_url = await save_image_upload(image, PROFILE_FOLDER, current_user.id)
        current_user.profile_image_url = image_url
        db.commit()
        logger.info("Profile image updated for user %s", current_user.id)
        return create_response(
            message="Profile image updated",
            data={"image_url": image_url},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/userlisted/bicycle")
def my_bicycles(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        bicycles = list_seller_bicycles(db, current_user.id)
        return create_response(
            message="Bicycles fetched",
            data=[BicycleResponse.model_validate(bicycle).model_dump() for bicycle in bicycles],
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
