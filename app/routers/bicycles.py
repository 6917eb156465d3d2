import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.bicycle import MAX_IMAGES, BicycleCreate, BicycleFilters, BicycleForm, BicycleResponse
from app.services.auth_middleware import get_current_user
from app.services.bicycle_service import create_bicycle, get_bicycle, list_bicycles, query_bicycles
from app.services.geo_service import DEFAULT_RADIUS_METERS, filter_within_radius
from app.utils.errors import BadRequest
from app.utils.response import create_response, handle_exception
from app.utils.uploads import save_image_uploads

router = APIRouter(prefix="/api", tags=["Bicycles"])
logger = logging.getLogger(__name__)

BICYCLE_FOLDER = "bicycles"


def _bicycle_payload(bicycle) -> dict:
    return BicycleResponse.model_validate(bicycle).model_dump()


@router.post("/hey")
async def create_listing(
    category: str | None = Form(None),
    brand: str | None = Form(None),
    model: str | None = Form(None),
    purchase_year: str | None = Form(None, alias="purchaseYear"),
    price: str | None = Form(None),
    gear_transmission: str | None = Form(None, alias="gearTransmission"),
    frame_material: str | None = Form(None, alias="frameMaterial"),
    suspension: str | None = Form(None),
    condition: str | None = Form(None),
    cycle_type: str | None = Form(None, alias="cycleType"),
    wheel_size: str | None = Form(None, alias="wheelSize"),
    has_receipt: str | None = Form(None, alias="hasReceipt"),
    additional_details: str | None = Form(None, alias="additionalDetails"),
    latitude: str | None = Form(None),
    longitude: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        fields = {
            "category": category,
            "brand": brand,
            "model": model,
            "purchase_year": purchase_year,
            "price": price,
            "gear_transmission": gear_transmission,
            "frame_material": frame_material,
            "suspension": suspension,
            "condition": condition,
            "cycle_type": cycle_type,
            "wheel_size": wheel_size,
            "has_receipt": has_receipt,
            "additional_details": additional_details,
            "latitude": latitude,
            "longitude": longitude,
        }
        # The premium flag is never accepted from sellers
        form = BicycleForm.model_validate({key: value for key, value in fields.items() if value not in (None, "")})

        uploads = images or []
        if not uploads:
            raise BadRequest("At least one image is required")
        if len(uploads) > MAX_IMAGES:
            raise BadRequest(f"At most {MAX_IMAGES} images are allowed")

        image_urls = await save_image_uploads(uploads, BICYCLE_FOLDER, current_user.id)
        payload = BicycleCreate(**form.model_dump(), seller_id=current_user.id, images=image_urls)
        bicycle = create_bicycle(db, payload)
        return create_response(
            message="Bicycle listed successfully",
            data=_bicycle_payload(bicycle),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/hey")
def list_listings(
    lat: float | None = Query(None),
    lon: float | None = Query(None),
    radius: float = Query(DEFAULT_RADIUS_METERS, ge=0),
    db: Session = Depends(get_db),
):
    try:
        bicycles = list_bicycles(db)
        if lat is not None or lon is not None:
            logger.info("Filtering bicycles within %sm of (%s, %s)", radius, lat, lon)
            bicycles = filter_within_radius(lat, lon, bicycles, radius)
        return create_response(
            message="Bicycles fetched",
            data=[_bicycle_payload(bicycle) for bicycle in bicycles],
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/bicycles")
def search_bicycles(
    is_premium: str | None = Query(None, alias="isPremium"),
    brand: str | None = Query(None),
    year_of_purchase: int | None = Query(None, alias="yearOfPurchase"),
    condition: str | None = Query(None),
    gear_transmission: str | None = Query(None, alias="gearTransmission"),
    frame_material: str | None = Query(None, alias="frameMaterial"),
    suspension: str | None = Query(None),
    wheel_size: str | None = Query(None, alias="wheelSize"),
    min_price: Decimal | None = Query(None, alias="minPrice"),
    max_price: Decimal | None = Query(None, alias="maxPrice"),
    sort_by: str | None = Query(None, alias="sortBy"),
    db: Session = Depends(get_db),
):
    try:
        filters = BicycleFilters(
            # Only an explicit "true" narrows to premium listings
            is_premium=True if is_premium == "true" else None,
            brand=brand or None,
            purchase_year=year_of_purchase,
            condition=condition or None,
            gear_transmission=gear_transmission or None,
            frame_material=frame_material or None,
            suspension=suspension or None,
            wheel_size=wheel_size or None,
            min_price=min_price,
            max_price=max_price,
        )
        bicycles = query_bicycles(db, filters, sort_by)
        return create_response(
            message="Bicycles fetched",
            data=[_bicycle_payload(bicycle) for bicycle in bicycles],
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/bicycle/details/{bicycle_id}")
def bicycle_details(bicycle_id: int, db: Session = Depends(get_db)):
    try:
        bicycle = get_bicycle(db, bicycle_id)
        return create_response(
            message="Bicycle fetched",
            data=_bicycle_payload(bicycle),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
