"""
Shared pytest fixtures for the Prospector test suite.
"""

from datetime import datetime, timezone

import pytest

from prospector.models import Prospect, Service, UserProfile
from prospector.workspace import Workspace
from tests.helpers import prospect_data


@pytest.fixture
def make_prospect():
    """Factory for valid Prospect records."""
    def _make(**overrides):
        return Prospect.model_validate(prospect_data(**overrides))
    return _make


@pytest.fixture
def service():
    return Service(id="svc_routes", name="Route Optimisation",
                   description="Cuts delivery mileage with automated routing.",
                   website="https://routes.example")


@pytest.fixture
def profile():
    return UserProfile(name="Rob Smith", email="rob@routes.example",
                       website="https://routes.example")


@pytest.fixture
def three_prospects(make_prospect):
    return [
        make_prospect(id="prs_a", company_name="Alpha Freight", hire_probability=85,
                      created_at=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)),
        make_prospect(id="prs_b", company_name="Beta Couriers", hire_probability=95,
                      created_at=datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc)),
        make_prospect(id="prs_c", company_name="Gamma Cargo", hire_probability=88,
                      created_at=datetime(2024, 3, 3, 9, 0, tzinfo=timezone.utc)),
    ]


@pytest.fixture
def workspace():
    """Fresh in-memory workspace with no generator."""
    return Workspace.in_memory()
