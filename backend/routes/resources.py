# backend/routes/resources.py
from typing import Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import get_db
import schemas.resource as resource_schemas
from services.resources import (
    DEFAULT_LIMIT, DEFAULT_PAGE, AmbulanceRepository, DoctorRepository, ResourceRepository,
)
from utils.errors import ValidationError
from utils.tokenJWT import ROLE_ADMIN, Identity, role_required


def build_resource_router(
    prefix: str,
    tag: str,
    label: str,
    repository_cls: Type[ResourceRepository],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    out_schema: Type[BaseModel],
    page_schema: Type[BaseModel],
) -> APIRouter:
    """CRUD router for one kind of directory entry.

    Reads are public; every write needs a token with exactly the admin role.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    not_found = f"{label} not found"

    def get_repository(db: Session = Depends(get_db)) -> ResourceRepository:
        return repository_cls(db)

    # Paginated listing with optional search and radius filter
    @router.get("", response_model=page_schema)
    def list_resources(
        page: int = Query(DEFAULT_PAGE, ge=1),
        limit: int = Query(DEFAULT_LIMIT, ge=1),
        search: Optional[str] = Query(None),
        latitude: Optional[float] = Query(None, ge=-90, le=90),
        longitude: Optional[float] = Query(None, ge=-180, le=180),
        radius: Optional[float] = Query(None, ge=0, allow_inf_nan=False, description="Kilometres, default 50"),
        repo: ResourceRepository = Depends(get_repository),
    ):
        if (latitude is None) != (longitude is None):
            raise ValidationError("latitude and longitude must be supplied together")

        return repo.get_all(
            page=page, limit=limit, search=search,
            latitude=latitude, longitude=longitude, radius=radius,
        )

    @router.get("/{resource_id}", response_model=out_schema)
    def get_resource(resource_id: int, repo: ResourceRepository = Depends(get_repository)):
        record = repo.get_by_id(resource_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        return record

    @router.post("", response_model=out_schema, status_code=status.HTTP_201_CREATED)
    def create_resource(
        payload: create_schema,
        repo: ResourceRepository = Depends(get_repository),
        current_identity: Identity = Depends(role_required(ROLE_ADMIN)),
    ):
        return repo.create(payload)

    # Partial update: only the fields present in the body are written
    @router.put("/{resource_id}", response_model=out_schema)
    def update_resource(
        resource_id: int,
        payload: update_schema,
        repo: ResourceRepository = Depends(get_repository),
        current_identity: Identity = Depends(role_required(ROLE_ADMIN)),
    ):
        record = repo.update(resource_id, payload)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        return record

    @router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_resource(
        resource_id: int,
        repo: ResourceRepository = Depends(get_repository),
        current_identity: Identity = Depends(role_required(ROLE_ADMIN)),
    ):
        if not repo.delete(resource_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


ambulance_router = build_resource_router(
    "/api/ambulances", "Ambulances", "Ambulance", AmbulanceRepository,
    resource_schemas.AmbulanceCreate, resource_schemas.AmbulanceUpdate,
    resource_schemas.AmbulanceOut, resource_schemas.AmbulancePage,
)

doctor_router = build_resource_router(
    "/api/doctors", "Doctors", "Doctor", DoctorRepository,
    resource_schemas.DoctorCreate, resource_schemas.DoctorUpdate,
    resource_schemas.DoctorOut, resource_schemas.DoctorPage,
)
