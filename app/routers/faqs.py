import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.faq import Faq
from app.schemas.faq import FaqCreate, FaqResponse, FaqUpdate
from app.services.auth_middleware import get_current_admin
from app.utils.errors import NotFound
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/faqs", tags=["FAQs"])
admin_router = APIRouter(
    prefix="/api/admin/faqs",
    tags=["FAQs Admin"],
    dependencies=[Depends(get_current_admin)],
)
logger = logging.getLogger(__name__)


def _faq_payload(faq: Faq) -> dict:
    return FaqResponse.model_validate(faq).model_dump()


def _get_faq_or_404(db: Session, faq_id: int) -> Faq:
    faq = db.query(Faq).filter(Faq.id == faq_id).first()
    if not faq:
        raise NotFound("FAQ not found")
    return faq


@router.get("")
def list_faqs(
    category: str | None = Query(None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Faq).filter(Faq.is_active == True)
        if category:
            query = query.filter(Faq.category == category)
        faqs = query.order_by(Faq.order.asc(), Faq.id.asc()).all()
        return create_response(
            message="FAQs fetched",
            data=[_faq_payload(faq) for faq in faqs],
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to fetch FAQs")


@admin_router.get("")
def admin_list_faqs(
    category: str | None = Query(None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Faq)
        if category:
            query = query.filter(Faq.category == category)
        faqs = query.order_by(Faq.order.asc(), Faq.id.asc()).all()
        return create_response(
            message="FAQs fetched",
            data=[_faq_payload(faq) for faq in faqs],
        )
    except Exception as exc:
        return handle_exception(exc)


@admin_router.post("", status_code=status.HTTP_201_CREATED)
def create_faq(body: FaqCreate, db: Session = Depends(get_db)):
    try:
        faq = Faq(**body.model_dump())
        db.add(faq)
        db.commit()
        db.refresh(faq)
        logger.info("FAQ id=%s created", faq.id)
        return create_response(
            message="FAQ created",
            data=_faq_payload(faq),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@admin_router.patch("/{faq_id}")
def update_faq(faq_id: int, body: FaqUpdate, db: Session = Depends(get_db)):
    try:
        faq = _get_faq_or_404(db, faq_id)
        update_data = body.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(faq, field, value)
        faq.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(faq)
        return create_response(message="FAQ updated", data=_faq_payload(faq))
    except Exception as exc:
        return handle_exception(exc)


@admin_router.delete("/{faq_id}")
def delete_faq(faq_id: int, db: Session = Depends(get_db)):
    try:
        faq = _get_faq_or_404(db, faq_id)
        faq.is_active = False
        db.commit()
        logger.info("FAQ id=%s deactivated", faq.id)
        return create_response(message="FAQ deleted", data={"id": faq.id}, status_code=status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc)
