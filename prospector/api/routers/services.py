"""Service catalogue routes."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError
from typing import Optional

from prospector.api.dependencies import get_workspace
from prospector.models import Service

router = APIRouter(prefix="/api/services", tags=["services"])


class ServiceCreate(BaseModel):
    name: str
    description: str
    website: Optional[str] = None


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None


@router.get("")
def list_services(ws=Depends(get_workspace)):
    return [s.model_dump() for s in ws.services.all()]


@router.post("")
def create_service(data: ServiceCreate, ws=Depends(get_workspace)):
    if not data.name.strip() or not data.description.strip():
        raise HTTPException(status_code=400, detail="Name and description are required")
    service = Service(**data.model_dump())
    ws.services.add([service])
    return service.model_dump()


@router.put("/{service_id}")
def update_service(service_id: str, data: ServiceUpdate, ws=Depends(get_workspace)):
    current = ws.services.get(service_id)
    if not current:
        raise HTTPException(status_code=404, detail="Service not found")
    update_data = {k: v for k, v in data.model_dump().items() if v is not None}
    if not update_data:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        updated = Service(**{**current.model_dump(), **update_data})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    ws.services.update(updated)
    return updated.model_dump()


@router.delete("/{service_id}")
def delete_service(service_id: str, ws=Depends(get_workspace)):
    if not ws.services.remove_many({service_id}):
        raise HTTPException(status_code=404, detail="Service not found")
    return {"deleted": service_id}
