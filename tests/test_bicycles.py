from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from app.models.bicycle import Bicycle
from app.schemas.bicycle import BicycleCreate, BicycleFilters
from app.services import bicycle_service


def _listing_fields(**overrides) -> dict:
    fields = {
        "category": "Adult",
        "brand": "Trek",
        "model": "Marlin 7",
        "purchase_year": 2021,
        "price": Decimal("1000"),
        "gear_transmission": "Multi-Speed",
        "frame_material": "Aluminum",
        "suspension": "Front",
        "condition": "Good",
        "cycle_type": "Mountain",
        "wheel_size": "29",
        "images": ["https://cdn.test/bicycles/one.jpg"],
    }
    fields.update(overrides)
    return fields


@pytest.fixture()
def seller(make_user):
    return make_user(username="seller@example.com")


@pytest.fixture()
def add_bicycle(db_session, seller):
    def _add(**overrides):
        bicycle = Bicycle(seller_id=seller.id, **_listing_fields(**overrides))
        db_session.add(bicycle)
        db_session.commit()
        db_session.refresh(bicycle)
        return bicycle

    return _add


def _prices(bicycles) -> list[Decimal]:
    return [bicycle.price for bicycle in bicycles]


def test_min_price_filter_is_numeric(db_session, add_bicycle):
    for price in ("500", "1000", "1500"):
        add_bicycle(price=Decimal(price))

    result = bicycle_service.query_bicycles(db_session, BicycleFilters(min_price=Decimal("800")))

    assert sorted(_prices(result)) == [Decimal("1000"), Decimal("1500")]


def test_price_range_does_not_compare_as_text(db_session, add_bicycle):
    add_bicycle(price=Decimal("9"))
    add_bicycle(price=Decimal("10"))
    add_bicycle(price=Decimal("100"))

    result = bicycle_service.query_bicycles(
        db_session, BicycleFilters(min_price=Decimal("5"), max_price=Decimal("50")), "price_asc"
    )

    assert _prices(result) == [Decimal("9"), Decimal("10")]


def test_sorting_by_price_and_recency(db_session, add_bicycle):
    now = datetime.utcnow()
    add_bicycle(price=Decimal("300"), created_at=now - timedelta(days=2))
    add_bicycle(price=Decimal("100"), created_at=now)
    add_bicycle(price=Decimal("200"), created_at=now - timedelta(days=1))
    no_filters = BicycleFilters()

    assert _prices(bicycle_service.query_bicycles(db_session, no_filters, "price_asc")) == [
        Decimal("100"), Decimal("200"), Decimal("300")
    ]
    assert _prices(bicycle_service.query_bicycles(db_session, no_filters, "price_desc")) == [
        Decimal("300"), Decimal("200"), Decimal("100")
    ]
    assert _prices(bicycle_service.query_bicycles(db_session, no_filters, "newest")) == [
        Decimal("100"), Decimal("200"), Decimal("300")
    ]
    # Unknown sort keys fall back to insertion order
    assert _prices(bicycle_service.query_bicycles(db_session, no_filters, "cheapest")) == [
        Decimal("300"), Decimal("100"), Decimal("200")
    ]


def test_equality_filters_combine_with_and(db_session, add_bicycle):
    match = add_bicycle(brand="Giant", condition="Like New", wheel_size="27.5", purchase_year=2022)
    add_bicycle(brand="Giant", condition="Fair", wheel_size="27.5", purchase_year=2022)
    add_bicycle(brand="Trek", condition="Like New", wheel_size="27.5", purchase_year=2022)
    add_bicycle(brand="Giant", condition="Like New", wheel_size="26", purchase_year=2022)

    filters = BicycleFilters(brand="Giant", condition="Like New", wheel_size="27.5", purchase_year=2022)
    result = bicycle_service.query_bicycles(db_session, filters)

    assert [bicycle.id for bicycle in result] == [match.id]


def test_no_filters_returns_everything(db_session, add_bicycle):
    created = [add_bicycle().id for _ in range(3)]

    result = bicycle_service.query_bicycles(db_session, BicycleFilters())

    assert [bicycle.id for bicycle in result] == created


def test_search_endpoint_filters_premium_only_when_true(client, add_bicycle):
    premium = add_bicycle(is_premium=True, price=Decimal("2000"))
    add_bicycle(is_premium=False, price=Decimal("700"))

    only_premium = client.get("/api/bicycles", params={"isPremium": "true"})
    assert [item["id"] for item in only_premium.json()["data"]] == [premium.id]

    everything = client.get("/api/bicycles", params={"isPremium": "false", "sortBy": "price_asc"})
    assert [item["price"] for item in everything.json()["data"]] == [700.0, 2000.0]


def test_search_endpoint_query_parameters(client, add_bicycle):
    add_bicycle(price=Decimal("500"), frame_material="Steel")
    wanted = add_bicycle(price=Decimal("1200"), frame_material="Carbon Fiber", suspension="Full")
    add_bicycle(price=Decimal("1500"), frame_material="Carbon Fiber", suspension="None")

    response = client.get(
        "/api/bicycles",
        params={"minPrice": "800", "maxPrice": "1300", "frameMaterial": "Carbon Fiber", "suspension": "Full"},
    )

    assert response.status_code == 200
    assert [item["id"] for item in response.json()["data"]] == [wanted.id]


def test_listing_round_trip(client, db_session, seller):
    payload = BicycleCreate(
        seller_id=seller.id,
        **_listing_fields(brand="Hero", model="Sprint", price=Decimal("599.99"), images=["a.jpg"]),
    )
    created = bicycle_service.create_bicycle(db_session, payload)

    response = client.get(f"/api/bicycle/details/{created.id}")

    assert response.status_code == 200
    detail = response.json()["data"]
    assert detail["brand"] == "Hero"
    assert detail["model"] == "Sprint"
    assert detail["price"] == 599.99
    assert detail["images"] == ["a.jpg"]
    assert detail["is_premium"] is False
    assert detail["status"] == "active"


def test_details_for_missing_bicycle_is_404(client):
    response = client.get("/api/bicycle/details/999")

    assert response.status_code == 404
    assert response.json()["message"] == "Bicycle not found"


def _form(**overrides) -> dict:
    form = {
        "category": "Kids",
        "brand": "Hero",
        "model": "Junior",
        "purchaseYear": "2020",
        "price": "3499.50",
        "gearTransmission": "Non-Geared",
        "frameMaterial": "Steel",
        "suspension": "None",
        "condition": "Fair",
        "cycleType": "BMX",
        "wheelSize": "20",
        "hasReceipt": "true",
        "latitude": "19.07",
        "longitude": "72.87",
    }
    form.update(overrides)
    return form


def _images(count: int):
    return [("images", (f"bike{index}.jpg", b"jpeg-bytes", "image/jpeg")) for index in range(count)]


def test_create_listing_via_upload(user_client, uploaded_images):
    response = user_client.post("/api/hey", data=_form(isPremium="true"), files=_images(2))

    assert response.status_code == 201
    listing = response.json()["data"]
    assert listing["seller_id"] == user_client.user.id
    assert listing["category"] == "Kids"
    assert listing["price"] == 3499.5
    assert listing["has_receipt"] is True
    assert listing["is_premium"] is False
    assert listing["images"] == [upload["url"] for upload in uploaded_images]
    assert len(listing["images"]) == 2

    mine = user_client.get("/api/userlisted/bicycle")
    assert [item["id"] for item in mine.json()["data"]] == [listing["id"]]


def test_create_listing_requires_login(client):
    response = client.post("/api/hey", data=_form(), files=_images(1))

    assert response.status_code == 401


def test_create_listing_requires_images(user_client):
    response = user_client.post("/api/hey", data=_form())

    assert response.status_code == 400
    assert response.json()["message"] == "At least one image is required"


def test_create_listing_caps_images(user_client, uploaded_images):
    response = user_client.post("/api/hey", data=_form(), files=_images(6))

    assert response.status_code == 400
    assert uploaded_images == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"purchaseYear": "1999"},
        {"purchaseYear": str(date.today().year + 1)},
        {"price": "-1"},
        {"wheelSize": "28"},
        {"condition": "Broken"},
        {"category": None},
    ],
)
def test_create_listing_validates_fields(user_client, uploaded_images, overrides):
    form = {key: value for key, value in _form(**overrides).items() if value is not None}

    response = user_client.post("/api/hey", data=form, files=_images(1))

    assert response.status_code == 400
    assert response.json()["data"]
    assert uploaded_images == []


def test_list_all_listings_without_coordinates(client, add_bicycle):
    add_bicycle()
    add_bicycle(latitude=19.0, longitude=72.8)

    response = client.get("/api/hey")

    assert response.status_code == 200
    assert len(response.json()["data"]) == 2


def test_geo_listing_filters_by_radius(client, add_bicycle):
    near = add_bicycle(latitude=19.0760, longitude=72.8777)  # Mumbai
    add_bicycle(latitude=18.5204, longitude=73.8567)  # Pune, ~120 km away
    add_bicycle()

    response = client.get("/api/hey", params={"lat": 19.07, "lon": 72.88, "radius": 10000})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()["data"]] == [near.id]


def test_geo_listing_with_zero_radius_keeps_exact_match(client, add_bicycle):
    exact = add_bicycle(latitude=10.0, longitude=10.0)
    add_bicycle(latitude=10.001, longitude=10.0)

    response = client.get("/api/hey", params={"lat": 10, "lon": 10, "radius": 0})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()["data"]] == [exact.id]


def test_geo_listing_rejects_negative_radius(client):
    response = client.get("/api/hey", params={"lat": 10, "lon": 10, "radius": -1})

    assert response.status_code == 400


def test_geo_listing_requires_both_coordinates(client):
    response = client.get("/api/hey", params={"lat": 19.07})

    assert response.status_code == 400
    assert response.json()["message"] == "Latitude and longitude are required."


def test_create_listing_with_one_bad_image_stores_nothing(user_client, uploaded_images):
    files = _images(2) + [("images", ("bike.gif", b"gif-bytes", "image/gif"))]

    response = user_client.post("/api/hey", data=_form(), files=files)

    assert response.status_code == 400
    assert response.json()["message"] == "Unsupported image type"
    assert uploaded_images == []
