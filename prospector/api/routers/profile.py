"""Sender profile routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from prospector.api.dependencies import get_workspace
from prospector.models import UserProfile

router = APIRouter(prefix="/api/profile", tags=["profile"])


class ProfileUpdate(BaseModel):
    name: str = ""
    email: str = ""
    website: str = ""


@router.get("")
def get_profile(ws=Depends(get_workspace)):
    profile = ws.profile.get()
    return {**profile.model_dump(), "is_complete": profile.is_complete}


@router.put("")
def update_profile(data: ProfileUpdate, ws=Depends(get_workspace)):
    profile = ws.profile.save(UserProfile(**data.model_dump()))
    return {**profile.model_dump(), "is_complete": profile.is_complete}
