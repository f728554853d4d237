# backend/models/resources.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String, CheckConstraint
from sqlalchemy.orm import declared_attr

from database import Base


def utcnow() -> datetime:
    # Naive UTC keeps SQLite and Postgres round-trips comparable
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Columns shared by every directory entry (ambulances, doctors).
# Coordinates are guarded by CHECK constraints as a last line behind the
# schema validation done before any write.
class ResourceMixin:
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    location = Column(String, nullable=False)

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    image = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    @declared_attr
    def __table_args__(cls):
        name = cls.__tablename__
        return (
            CheckConstraint("latitude >= -90 AND latitude <= 90", name=f"ck_{name}_latitude"),
            CheckConstraint("longitude >= -180 AND longitude <= 180", name=f"ck_{name}_longitude"),
        )


class Ambulance(ResourceMixin, Base):
    __tablename__ = "ambulances"


class Doctor(ResourceMixin, Base):
    __tablename__ = "doctors"

    specialization = Column(String, nullable=True)
