import uuid
from datetime import datetime
from pathlib import Path

from fastapi import UploadFile

from app.services import spaces_service
from app.utils.errors import BadRequest

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/jpg"}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png"}


async def read_image_upload(file: UploadFile) -> bytes:
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise BadRequest("Unsupported image type")
    contents = await file.read()
    if not contents:
        raise BadRequest("Empty file upload")
    return contents


def store_image(contents: bytes, file: UploadFile, folder: str, owner_id: int) -> str:
    extension = Path(file.filename or "").suffix.lower() or ".jpg"
    if extension not in ALLOWED_EXTENSIONS:
        extension = ".jpg"

    timestamp = int(datetime.utcnow().timestamp())
    filename = f"user_{owner_id}_{timestamp}_{uuid.uuid4().hex[:8]}{extension}"
    return spaces_service.upload_image(contents, filename, folder, content_type=file.content_type)


async def save_image_upload(file: UploadFile, folder: str, owner_id: int) -> str:
    return store_image(await read_image_upload(file), file, folder, owner_id)


async def save_image_uploads(files: list[UploadFile], folder: str, owner_id: int) -> list[str]:
    """Store a batch of images; nothing is stored unless every file is a usable image."""
    contents = [await read_image_upload(file) for file in files]
    return [store_image(data, file, folder, owner_id) for data, file in zip(contents, files)]
