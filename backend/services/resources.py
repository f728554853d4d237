# backend/services/resources.py
import logging
import math
from contextlib import contextmanager
from typing import Any, Dict, Mapping, Optional, Type, Union

import pydantic
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.resources import Ambulance, Doctor, utcnow
from schemas.resource import (
    AmbulanceCreate, AmbulanceUpdate, DoctorCreate, DoctorUpdate,
)
from utils.distance import filter_by_radius
from utils.errors import CreationFailed, StorageFailure, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_RADIUS_KM = 50.0

# Range of a signed 64-bit INTEGER column; ids outside it cannot exist
MIN_ROW_ID = -2 ** 63
MAX_ROW_ID = 2 ** 63 - 1

Fields = Union[pydantic.BaseModel, Mapping[str, Any]]


def _like_pattern(term: str) -> str:
    # Treat the term as a literal substring, not a LIKE expression
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _error_messages(exc: pydantic.ValidationError):
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'payload'}: {err['msg']}"
        for err in exc.errors()
    ]


class ResourceRepository:
    """Persistence and listing for one kind of directory entry.

    Subclasses bind the ORM model, the create/update schemas and the columns
    searched by ``get_all``. One instance wraps one request-scoped session.
    """

    model: Type[Any]
    create_schema: Type[pydantic.BaseModel]
    update_schema: Type[pydantic.BaseModel]
    search_fields: tuple = ("title", "description", "location", "phone")

    def __init__(self, db: Session):
        self.db = db

    @property
    def kind(self) -> str:
        return self.model.__tablename__

    @contextmanager
    def _storage(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("%s %s failed", action, self.kind)
            raise StorageFailure() from e

    def _validate(self, schema: Type[pydantic.BaseModel], fields: Fields) -> pydantic.BaseModel:
        if isinstance(fields, schema):
            return fields
        if isinstance(fields, pydantic.BaseModel):
            fields = fields.model_dump(exclude_unset=True)
        try:
            return schema.model_validate(fields)
        except pydantic.ValidationError as e:
            raise ValidationError(_error_messages(e)) from e

    def get_all(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        search: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        radius: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Return one page of entries, newest first.

        The search filter is applied in SQL to both the page and the count.
        The radius filter runs afterwards on the fetched page only, so a page
        may hold fewer than ``limit`` rows and ``total`` ignores the radius.
        """
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive integers")

        query = self.db.query(self.model)

        term = (search or "").strip()
        if term:
            pattern = _like_pattern(term)
            query = query.filter(or_(*[
                getattr(self.model, name).ilike(pattern, escape="\\")
                for name in self.search_fields
            ]))

        offset = (page - 1) * limit
        with self._storage("list"):
            total = query.count()
            # Past the last row; also keeps huge offsets away from the driver
            if offset >= total:
                rows = []
            else:
                rows = (
                    query.order_by(self.model.created_at.desc(), self.model.id.desc())
                    .offset(offset)
                    .limit(min(limit, total - offset))
                    .all()
                )

        if latitude is not None and longitude is not None:
            rows = filter_by_radius(
                rows, latitude, longitude,
                DEFAULT_RADIUS_KM if radius is None else radius,
            )

        return {
            "data": rows,
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit),
        }

    def get_by_id(self, resource_id: int):
        if not MIN_ROW_ID <= resource_id <= MAX_ROW_ID:
            return None
        with self._storage("get"):
            return self.db.query(self.model).filter(self.model.id == resource_id).first()

    def create(self, fields: Fields):
        data = self._validate(self.create_schema, fields)

        now = utcnow()
        record = self.model(**data.model_dump(), created_at=now, updated_at=now)
        with self._storage("create"):
            self.db.add(record)
            self.db.commit()
            new_id = record.id

        created = self.get_by_id(new_id)
        if created is None:
            raise CreationFailed(f"Failed to create {self.kind[:-1]}")
        logger.info("Created %s id=%s", self.kind[:-1], created.id)
        return created

    def update(self, resource_id: int, fields: Fields):
        record = self.get_by_id(resource_id)
        if record is None:
            return None

        changes = self._validate(self.update_schema, fields).model_dump(exclude_unset=True)
        if not changes:
            return record

        for key, value in changes.items():
            setattr(record, key, value)
        record.updated_at = utcnow()

        with self._storage("update"):
            self.db.commit()
            self.db.refresh(record)
        logger.info("Updated %s id=%s fields=%s", self.kind[:-1], record.id, sorted(changes))
        return record

    def delete(self, resource_id: int) -> bool:
        record = self.get_by_id(resource_id)
        if record is None:
            return False

        with self._storage("delete"):
            self.db.delete(record)
            self.db.commit()
        logger.info("Deleted %s id=%s", self.kind[:-1], resource_id)
        return True


class AmbulanceRepository(ResourceRepository):
    model = Ambulance
    create_schema = AmbulanceCreate
    update_schema = AmbulanceUpdate


class DoctorRepository(ResourceRepository):
    model = Doctor
    create_schema = DoctorCreate
    update_schema = DoctorUpdate
    search_fields = ResourceRepository.search_fields + ("specialization",)
