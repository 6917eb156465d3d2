import logging
import uuid
from datetime import date, datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.visit import VisitCreate, VisitResponse
from app.services.analytics_service import get_visit_analytics, normalize_group_by, record_visit
from app.services.auth_middleware import get_current_admin, get_optional_user
from app.utils.errors import BadRequest
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api", tags=["Analytics"])
logger = logging.getLogger(__name__)

SESSION_VISITOR_KEY = "visitor_id"


@router.post("/visits", status_code=status.HTTP_201_CREATED)
def track_visit(
    body: VisitCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    try:
        session_id = request.session.get(SESSION_VISITOR_KEY)
        if not session_id:
            session_id = uuid.uuid4().hex
            request.session[SESSION_VISITOR_KEY] = session_id
        visit = record_visit(
            db,
            body,
            session_id=session_id,
            user_id=current_user.id if current_user else None,
        )
        return create_response(
            message="Visit recorded",
            data=VisitResponse.model_validate(visit).model_dump(),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/admin/analytics/visits")
def visit_analytics(
    start_date: date | datetime | None = Query(None, alias="startDate"),
    end_date: date | datetime | None = Query(None, alias="endDate"),
    group_by: Literal["device", "deviceType", "platform", "browser", "path"] | None = Query(None, alias="groupBy"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        try:
            dimension = normalize_group_by(group_by)
        except ValueError as exc:
            raise BadRequest(str(exc)) from exc
        logger.info(
            "Admin %s fetching visit analytics start=%s end=%s group_by=%s",
            admin.id,
            start_date,
            end_date,
            dimension,
        )
        analytics = get_visit_analytics(db, start_date=start_date, end_date=end_date, group_by=dimension)
        return create_response(
            message="Visit analytics fetched",
            data=analytics,
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
