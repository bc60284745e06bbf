# citygrid/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy (SQLite by default, PostgreSQL in production). All models
are auto-imported here so create_tables() creates every table in one call.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from citygrid.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Sessions are handed across FastAPI's worker threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,       # Auto-reconnect if DB connection drops
        "pool_size": 10,
        "max_overflow": 20,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,                  # Set True to log all SQL queries (debug only)
    **_engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from citygrid.models.asset import AssetRow                      # noqa
    from citygrid.models.parking_slot import ParkingSlotRow         # noqa
    from citygrid.models.waste_container import WasteContainerRow   # noqa
    from citygrid.models.power_allocation import PowerAllocationRow # noqa
    from citygrid.models.device import DeviceRow                    # noqa
    from citygrid.models.counter import CounterRow                  # noqa

    Base.metadata.create_all(bind=bind or engine)
