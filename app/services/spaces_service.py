import logging
from pathlib import Path

import boto3

from app.config import settings

logger = logging.getLogger(__name__)

_s3 = None


def _client():
    global _s3
    if _s3 is None:
        session = boto3.session.Session()
        _s3 = session.client(
            "s3",
            region_name=settings.SPACES_REGION,
            endpoint_url=settings.SPACES_ENDPOINT,
            aws_access_key_id=settings.SPACES_KEY,
            aws_secret_access_key=settings.SPACES_SECRET,
        )
    return _s3


def _join_path(*segments: str) -> str:
    cleaned = [segment.strip("/") for segment in segments if segment and segment.strip("/")]
    return "/".join(cleaned)


def _upload_file(data: bytes, key: str, content_type: str | None = None) -> str:
    extra_args = {"ACL": "public-read"}
    if content_type:
        extra_args["ContentType"] = content_type

    _client().put_object(
        Bucket=settings.SPACES_NAME,
        Key=key,
        Body=data,
        **extra_args
    )
    return f"{settings.SPACES_CDN_URL}/{key}"


def _save_local(data: bytes, key: str) -> str:
    path = Path(settings.UPLOAD_DIR) / key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return f"/uploads/{key}"


def upload_image(data: bytes, filename: str, folder: str, content_type: str | None = None) -> str:
    """Store an image in Spaces when configured, otherwise under UPLOAD_DIR; returns its URL."""
    if settings.SPACES_NAME:
        key = _join_path(settings.SPACES_BASE_PATH, folder, filename)
        url = _upload_file(data, key, content_type)
    else:
        url = _save_local(data, _join_path(folder, filename))
    logger.info("Stored image %s", url)
    return url
