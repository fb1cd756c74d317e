"""Generated email routes: history, one-off drafts and the bulk run."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from prospector.agents.outreach_pipeline import draft_email
from prospector.api.dependencies import get_workspace, require_generator
from prospector.db.stores import find_service

router = APIRouter(prefix="/api/emails", tags=["emails"])


class DraftRequest(BaseModel):
    prospect_id: str
    service_id: Optional[str] = None


class BulkRequest(BaseModel):
    service_id: Optional[str] = None


@router.get("")
def list_emails(prospect_id: Optional[str] = None, ws=Depends(get_workspace)):
    emails = ws.emails.for_prospect(prospect_id) if prospect_id else ws.emails.all()
    return [e.model_dump(mode="json") for e in emails]


@router.delete("/{email_id}")
def delete_email(email_id: str, ws=Depends(get_workspace)):
    if not ws.emails.remove_many({email_id}):
        raise HTTPException(status_code=404, detail="Email not found")
    return {"deleted": email_id}


@router.post("/draft")
async def create_draft(data: DraftRequest, ws=Depends(get_workspace)):
    generator = require_generator(ws)
    prospect = ws.prospects.get(data.prospect_id)
    if not prospect:
        raise HTTPException(status_code=404, detail="Prospect not found")
    service = find_service(ws.services, data.service_id)
    email = await draft_email(generator, prospect, service, ws.profile.get())
    ws.emails.add([email])
    return email.model_dump(mode="json")


@router.post("/bulk")
async def run_bulk(data: BulkRequest, ws=Depends(get_workspace)):
    """Generate one email per selected prospect. Responds when the batch is done;
    poll /bulk/progress meanwhile."""
    require_generator(ws)
    service = find_service(ws.services, data.service_id)
    if not ws.runner.is_running:
        ws.progress.reset()
    report = await ws.runner.run(ws.board.selected_prospects(), service, ws.profile.get(),
                                 selection=ws.board.selection)
    return report.to_dict()


@router.get("/bulk/progress")
def bulk_progress(ws=Depends(get_workspace)):
    return {**ws.progress.to_dict(), **ws.runner.to_dict()}
