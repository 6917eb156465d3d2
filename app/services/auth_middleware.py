from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.utils.errors import Forbidden, Unauthorized

SESSION_USER_KEY = "user_id"


def login_session(request: Request, user: User) -> None:
    request.session[SESSION_USER_KEY] = user.id


def logout_session(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> User | None:
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        # Account no longer exists; drop the stale session
        request.session.pop(SESSION_USER_KEY, None)
    return user


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if not user:
        raise Unauthorized()
    return user


def get_current_admin(user: User | None = Depends(get_optional_user)) -> User:
    if not user:
        raise Unauthorized("Authentication required")
    if not user.is_admin:
        raise Forbidden()
    return user
