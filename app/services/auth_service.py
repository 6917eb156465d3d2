import hashlib
import hmac
import logging
import secrets

from sqlalchemy.orm import Session

from app.models.user import User

logger = logging.getLogger(__name__)

# scrypt cost parameters; a 64-byte key is stored as "<hex key>.<hex salt>"
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 64
SALT_BYTES = 16


def _derive_key(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive_key(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    try:
        hashed, salt = stored.split(".")
        expected = bytes.fromhex(hashed)
    except ValueError:
        logger.warning("Stored password hash has an unexpected format")
        return False
    return hmac.compare_digest(expected, _derive_key(password, salt))


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password):
        return None
    return user
