from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from colorplan.config import Settings
from colorplan.main import create_app
from colorplan.services.planner import PlannerService

# Monday, so the current week runs 2026-10-19 .. 2026-10-25.
FIXED_NOW = datetime(2026, 10, 19, 8, 30)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def planner() -> PlannerService:
    return PlannerService.with_sample_data(FIXED_NOW.date(), seed=False)


@pytest.fixture
def seeded_planner() -> PlannerService:
    return PlannerService.with_sample_data(FIXED_NOW.date())


def build_client(*, seed: bool = True) -> TestClient:
    settings = Settings(app_name="ColorPlan Test", seed_sample_data=seed)
    return TestClient(create_app(settings, clock=lambda: FIXED_NOW))


@pytest.fixture
def client() -> TestClient:
    return build_client(seed=False)


@pytest.fixture
def seeded_client() -> TestClient:
    return build_client(seed=True)
