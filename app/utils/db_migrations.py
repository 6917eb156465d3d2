from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine


def ensure_bicycle_geo_columns(engine: Engine) -> None:
    """Add latitude/longitude to bicycles tables created before geo search existed."""
    inspector = inspect(engine)
    if "bicycles" not in inspector.get_table_names():
        return
    columns = {column["name"] for column in inspector.get_columns("bicycles")}
    missing = [column for column in ("latitude", "longitude") if column not in columns]
    if not missing:
        return
    with engine.begin() as connection:
        for column in missing:
            connection.execute(text(f"ALTER TABLE bicycles ADD COLUMN {column} FLOAT"))


def ensure_user_profile_image_column(engine: Engine) -> None:
    inspector = inspect(engine)
    if "users" not in inspector.get_table_names():
        return
    columns = {column["name"] for column in inspector.get_columns("users")}
    if "profile_image_url" in columns:
        return
    with engine.begin() as connection:
        connection.execute(text("ALTER TABLE users ADD COLUMN profile_image_url VARCHAR"))
