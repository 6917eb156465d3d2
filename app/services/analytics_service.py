import logging
from datetime import date, datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.visit import Visit
from app.schemas.visit import VisitCreate

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"
DEFAULT_GROUP_BY = "deviceType"

GROUP_COLUMNS = {
    "deviceType": Visit.device_type,
    "platform": Visit.platform,
    "browser": Visit.browser,
    "path": Visit.path,
}
GROUP_ALIASES = {"device": "deviceType"}


def normalize_group_by(group_by: str | None) -> str:
    if not group_by:
        return DEFAULT_GROUP_BY
    group_by = GROUP_ALIASES.get(group_by, group_by)
    if group_by not in GROUP_COLUMNS:
        raise ValueError(f"Unsupported groupBy value: {group_by}")
    return group_by


def _as_naive_utc(value: datetime) -> datetime:
    # Visit timestamps are stored as naive UTC
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _window_start(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    return datetime.combine(value, datetime.min.time())


def _window_end(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    return datetime.combine(value, datetime.max.time())


def record_visit(db: Session, body: VisitCreate, session_id: str, user_id: int | None = None) -> Visit:
    visit = Visit(
        path=body.path,
        device_type=body.device_type,
        platform=body.platform,
        browser=body.browser,
        user_id=user_id,
        session_id=session_id,
        timestamp=datetime.utcnow(),
    )
    db.add(visit)
    db.commit()
    db.refresh(visit)
    return visit


def get_visit_analytics(
    db: Session,
    start_date: date | datetime | None = None,
    end_date: date | datetime | None = None,
    group_by: str | None = None,
) -> list[dict]:
    """Count visits per value of one dimension inside an inclusive date window."""
    group_by = normalize_group_by(group_by)
    column = GROUP_COLUMNS[group_by]

    query = db.query(column, func.count(Visit.id))
    if start_date is not None:
        query = query.filter(Visit.timestamp >= _window_start(start_date))
    if end_date is not None:
        query = query.filter(Visit.timestamp <= _window_end(end_date))
    rows = query.group_by(column).all()

    # NULL and empty values collapse into a single "Unknown" bucket
    counts: dict[str, int] = {}
    for value, count in rows:
        label = value or UNKNOWN_LABEL
        counts[label] = counts.get(label, 0) + int(count or 0)

    logger.info("Visit analytics grouped by %s returned %s groups", group_by, len(counts))
    return [{group_by: label, "count": count} for label, count in counts.items()]
