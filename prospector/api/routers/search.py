"""Prospect search routes: run a search, pick results, save them."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from prospector.api.dependencies import get_workspace, require_generator
from prospector.db.stores import find_service

router = APIRouter(prefix="/api/search", tags=["search"])


class SearchRequest(BaseModel):
    service_id: Optional[str] = None
    sector: str = ""
    location: str = ""


class ToggleRequest(BaseModel):
    prospect_id: str


def _results(ws) -> dict:
    return {
        "prospects": [p.model_dump(mode="json") for p in ws.search.results],
        "rejected": ws.search.rejected,
        "selected": sorted(ws.search.selection.ids),
        "all_selected": ws.search.selection.all_visible_selected(ws.search.result_ids()),
    }


@router.post("")
async def run_search(data: SearchRequest, ws=Depends(get_workspace)):
    generator = require_generator(ws)
    service = find_service(ws.services, data.service_id)
    await ws.search.search(generator, service, data.sector, data.location, ws.profile.get())
    return _results(ws)


@router.get("/results")
def get_results(ws=Depends(get_workspace)):
    return _results(ws)


@router.post("/selection/toggle")
def toggle_result(data: ToggleRequest, ws=Depends(get_workspace)):
    try:
        selected = ws.search.toggle(data.prospect_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Result not found")
    return {"prospect_id": data.prospect_id, "selected": selected}


@router.post("/selection/all")
def select_all_results(ws=Depends(get_workspace)):
    ws.search.select_all()
    return _results(ws)


@router.post("/save")
def save_selected(ws=Depends(get_workspace)):
    if not len(ws.search.selection):
        raise HTTPException(status_code=400, detail="Please select at least one prospect.")
    saved = ws.search.save_selected(ws.prospects)
    return {"saved": saved, "message": f"{saved} prospect(s) saved."}
