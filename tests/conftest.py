from unittest.mock import MagicMock

import pytest

from recordbricks.connectors.api.client import RecordApiClient

FIXED_NOW = "2024-01-15T09:30:00.000Z"


@pytest.fixture
def api():
    return MagicMock(spec=RecordApiClient)


@pytest.fixture
def fixed_now(monkeypatch):
    for module in (
        "recordbricks.services.client_service",
        "recordbricks.services.project_service",
        "recordbricks.services.milestone_service",
    ):
        monkeypatch.setattr(f"{module}.utc_now_iso", lambda: FIXED_NOW)
    return FIXED_NOW
