import logging

from sqlalchemy.orm import Query, Session

from app.models.bicycle import Bicycle
from app.schemas.bicycle import BicycleCreate, BicycleFilters, SortByEnum
from app.utils.errors import NotFound

logger = logging.getLogger(__name__)

# Equality filters: schema field -> column
EQUALITY_FILTERS = {
    "is_premium": Bicycle.is_premium,
    "brand": Bicycle.brand,
    "purchase_year": Bicycle.purchase_year,
    "condition": Bicycle.condition,
    "gear_transmission": Bicycle.gear_transmission,
    "frame_material": Bicycle.frame_material,
    "suspension": Bicycle.suspension,
    "wheel_size": Bicycle.wheel_size,
}


def _apply_sort(query: Query, sort_by: str | None) -> Query:
    if sort_by == SortByEnum.price_asc.value:
        return query.order_by(Bicycle.price.asc(), Bicycle.id.asc())
    if sort_by == SortByEnum.price_desc.value:
        return query.order_by(Bicycle.price.desc(), Bicycle.id.asc())
    if sort_by == SortByEnum.newest.value:
        return query.order_by(Bicycle.created_at.desc(), Bicycle.id.desc())
    return query.order_by(Bicycle.id.asc())


def build_bicycle_query(db: Session, filters: BicycleFilters, sort_by: str | None = None) -> Query:
    query = db.query(Bicycle)
    for field, column in EQUALITY_FILTERS.items():
        value = getattr(filters, field)
        if value is not None:
            query = query.filter(column == value)
    if filters.min_price is not None:
        query = query.filter(Bicycle.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(Bicycle.price <= filters.max_price)
    return _apply_sort(query, sort_by)


def query_bicycles(db: Session, filters: BicycleFilters, sort_by: str | None = None) -> list[Bicycle]:
    bicycles = build_bicycle_query(db, filters, sort_by).all()
    logger.debug("Bicycle query %s sort_by=%s matched %s", filters.model_dump(exclude_none=True), sort_by, len(bicycles))
    return bicycles


def list_bicycles(db: Session) -> list[Bicycle]:
    return db.query(Bicycle).order_by(Bicycle.id.asc()).all()


def list_seller_bicycles(db: Session, seller_id: int) -> list[Bicycle]:
    return db.query(Bicycle).filter(Bicycle.seller_id == seller_id).order_by(Bicycle.id.asc()).all()


def get_bicycle(db: Session, bicycle_id: int) -> Bicycle:
    bicycle = db.query(Bicycle).filter(Bicycle.id == bicycle_id).first()
    if not bicycle:
        raise NotFound("Bicycle not found")
    return bicycle


def create_bicycle(db: Session, payload: BicycleCreate) -> Bicycle:
    bicycle = Bicycle(**payload.model_dump(mode="json", exclude={"price"}), price=payload.price)
    db.add(bicycle)
    db.commit()
    db.refresh(bicycle)
    logger.info("Bicycle id=%s listed by seller_id=%s", bicycle.id, bicycle.seller_id)
    return bicycle
