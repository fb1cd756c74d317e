"""
End-to-end flow over a SQLite-backed workspace:
search -> save -> filter/select -> bulk generate -> reopen and check persistence.
"""

import asyncio
import json

from prospector.models import Service, UserProfile
from prospector.workspace import Workspace
from tests.helpers import FakeGenerator, draft_text, prospect_data


def test_full_outreach_flow(tmp_path):
    db_path = str(tmp_path / "flow.db")
    batch = json.dumps([
        prospect_data(id="p1", company_name="Norte Abogados", sector="Legal", hire_probability=92),
        prospect_data(id="p2", company_name="Sur Logistica", sector="Logistics", hire_probability=87),
        prospect_data(id="p3", company_name="Este Retail", sector="Retail", hire_probability=50),
    ])
    generator = FakeGenerator(batches=["Results:\n" + batch],
                              drafts=[draft_text("For Norte"), draft_text("For Sur")])

    ws = Workspace.sqlite(db_path, generator=generator)
    ws.profile.save(UserProfile(name="Rob Smith", email="rob@routes.example"))
    service = Service(name="Route Optimisation", description="Automated routing.")
    ws.services.add([service])

    outcome = asyncio.run(ws.search.search(generator, service, "Any", "Spain", ws.profile.get()))
    assert outcome.rejected == 1
    ws.search.select_all()
    assert ws.search.save_selected(ws.prospects) == 2

    ws.board.select_all_visible()
    report = asyncio.run(ws.runner.run(ws.board.selected_prospects(), service,
                                       ws.profile.get(), selection=ws.board.selection))
    assert report.succeeded == 2
    assert len(ws.board.selection) == 0

    reopened = Workspace.sqlite(db_path)
    assert [p.id for p in reopened.board.visible()] == ["p1", "p2"]
    assert sorted(e.draft.subject for e in reopened.emails.all()) == ["For Norte", "For Sur"]
    assert reopened.profile.get().name == "Rob Smith"
    assert reopened.services.get(service.id).name == "Route Optimisation"
