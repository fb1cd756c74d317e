"""
Test doubles and sample data shared across the suite.
"""

import json


class FakeGenerator:
    """Scripted ProspectGenerator.

    Each queued response is either raw text (returned) or an exception
    instance (raised). Every call is recorded in order, optionally into a
    shared events list so tests can check interleaving with progress reports.
    """

    def __init__(self, batches=None, drafts=None, events=None):
        self.batches = list(batches or [])
        self.drafts = list(drafts or [])
        self.events = events if events is not None else []
        self.calls = []

    @staticmethod
    def _next(queue):
        response = queue.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def generate_prospect_batch(self, service, sector, location):
        self.calls.append(("search", service.id, sector, location))
        self.events.append(("search", sector))
        return self._next(self.batches)

    async def generate_email_draft(self, prospect, service, profile):
        self.calls.append(("email", prospect.id))
        self.events.append(("generate", prospect.id))
        return self._next(self.drafts)


class RecordingSink:
    """ProgressSink that writes into a shared events list."""

    def __init__(self, events):
        self.events = events

    def report(self, current, total, label):
        self.events.append(("progress", current, total, label))


def prospect_data(**overrides) -> dict:
    data = {
        "id": "prs_acme",
        "company_name": "Acme Logistics",
        "website": "https://acme.example",
        "contact": {
            "name": "Laura Gomez",
            "title": "Operations Director",
            "email": "laura@acme.example",
            "phone": "+34 600 000 000",
        },
        "location": "Madrid, Spain",
        "sector": "Logistics",
        "address": "Calle Mayor 1, Madrid",
        "needs_analysis": "Manual route planning across three depots.",
        "hire_probability": 90,
        "rating": {"score": 4.5, "reviews": 120},
        "created_at": "2024-03-10T12:00:00+00:00",
    }
    data.update(overrides)
    return data


def draft_text(subject="Quick idea for your depots", body="Dear Laura,\n\nHello.") -> str:
    return "Here is the email:\n" + json.dumps({"subject": subject, "body": body})
