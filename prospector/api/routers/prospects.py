"""Saved prospect routes: listing view, selection, edits, removal, call log."""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from prospector.api.dependencies import get_workspace
from prospector.listing.filter_sort import SORT_KEYS, FilterCriteria
from prospector.models import CallLog, CallOutcome, Prospect

router = APIRouter(prefix="/api/prospects", tags=["prospects"])


class ViewUpdate(BaseModel):
    sector: str = ""
    location: str = ""
    min_probability: Optional[float] = None
    max_probability: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: Optional[str] = None


class ToggleRequest(BaseModel):
    prospect_id: str


class CallCreate(BaseModel):
    outcome: CallOutcome
    notes: str = ""
    called_at: Optional[datetime] = None


def _get_or_404(ws, prospect_id: str) -> Prospect:
    prospect = ws.prospects.get(prospect_id)
    if not prospect:
        raise HTTPException(status_code=404, detail="Prospect not found")
    return prospect


@router.get("")
def list_prospects(ws=Depends(get_workspace)):
    return ws.board.to_dict()


@router.put("/view")
def set_view(data: ViewUpdate, ws=Depends(get_workspace)):
    if data.sort_by is not None and data.sort_by not in SORT_KEYS:
        raise HTTPException(status_code=400, detail=f"Unknown sort key: {data.sort_by}")
    criteria = FilterCriteria(**data.model_dump(exclude={"sort_by"}))
    ws.board.set_view(criteria, data.sort_by)
    return ws.board.to_dict()


@router.delete("/view")
def reset_view(ws=Depends(get_workspace)):
    ws.board.reset_view()
    return ws.board.to_dict()


@router.post("/selection/toggle")
def toggle_prospect(data: ToggleRequest, ws=Depends(get_workspace)):
    try:
        selected = ws.board.toggle(data.prospect_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Prospect not found")
    return {"prospect_id": data.prospect_id, "selected": selected}


@router.post("/selection/all")
def select_all_visible(ws=Depends(get_workspace)):
    ws.board.select_all_visible()
    return ws.board.to_dict()


@router.delete("/selection")
def clear_selection(ws=Depends(get_workspace)):
    ws.board.selection.clear()
    return ws.board.to_dict()


@router.post("/remove-selected")
def remove_selected(ws=Depends(get_workspace)):
    if not len(ws.board.selection):
        raise HTTPException(status_code=400, detail="Please select at least one prospect.")
    removed = ws.board.remove_selected()
    return {"removed": sorted(removed), "count": len(removed)}


@router.get("/{prospect_id}")
def get_prospect(prospect_id: str, ws=Depends(get_workspace)):
    prospect = _get_or_404(ws, prospect_id)
    return {
        **prospect.model_dump(mode="json"),
        "emails": [e.model_dump(mode="json") for e in ws.emails.for_prospect(prospect_id)],
        "calls": [c.model_dump(mode="json") for c in ws.calls.for_prospect(prospect_id)],
    }


@router.put("/{prospect_id}")
def update_prospect(prospect_id: str, data: dict, ws=Depends(get_workspace)):
    current = _get_or_404(ws, prospect_id)
    if data.get("id", prospect_id) != prospect_id:
        raise HTTPException(status_code=400, detail="Prospect id cannot be changed")
    try:
        updated = Prospect.model_validate({**current.model_dump(), **data, "id": prospect_id})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    ws.prospects.update(updated)
    return updated.model_dump(mode="json")


@router.get("/{prospect_id}/calls")
def list_calls(prospect_id: str, ws=Depends(get_workspace)):
    _get_or_404(ws, prospect_id)
    return [c.model_dump(mode="json") for c in ws.calls.for_prospect(prospect_id)]


@router.post("/{prospect_id}/calls")
def log_call(prospect_id: str, data: CallCreate, ws=Depends(get_workspace)):
    _get_or_404(ws, prospect_id)
    fields = data.model_dump(exclude_none=True)
    call = CallLog(prospect_id=prospect_id, **fields)
    ws.calls.add([call])
    return call.model_dump(mode="json")
