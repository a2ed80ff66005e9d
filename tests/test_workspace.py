from unittest.mock import MagicMock

import httpx
import pytest

from recordbricks import RecordWorkspace
from recordbricks.core.exceptions import ConfigurationError, ErrorPolicy
from recordbricks.services.client_service import ClientService
from recordbricks.services.project_service import ProjectService


CONFIG = {
    "connection": {
        "base_url": "https://records.example.test",
        "auth": {"kind": "project_key", "project_id": "proj-1", "public_key": "pk"},
    }
}


def _mock_response(payload):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    return response


def test_workspace_hands_out_cached_services_sharing_one_client():
    client = MagicMock(spec=httpx.Client)

    ws = RecordWorkspace(CONFIG, client=client)

    assert isinstance(ws.clients, ClientService)
    assert isinstance(ws.projects, ProjectService)
    assert ws.clients is ws.service("client_c")
    assert ws.clients.api is ws.projects.api is ws.milestones.api
    assert ws.clients.projects is ws.projects
    assert ws.projects.milestones is ws.milestones


def test_services_built_by_table_name_share_the_workspace_collaborators():
    ws = RecordWorkspace(CONFIG, client=MagicMock(spec=httpx.Client))

    clients = ws.service("client_c")

    assert clients.projects is ws.service("project_c")
    assert clients.projects.milestones is ws.service("milestone_c")


def test_workspace_error_policy_comes_from_config_or_override():
    client = MagicMock(spec=httpx.Client)

    ws = RecordWorkspace({**CONFIG, "error_policy": "raise"}, client=client)
    assert ws.clients.error_policy is ErrorPolicy.RAISE

    ws = RecordWorkspace({**CONFIG, "error_policy": "raise"}, client=client, error_policy=ErrorPolicy.SUPPRESS)
    assert ws.clients.error_policy is ErrorPolicy.SUPPRESS


def test_workspace_joins_projects_to_client_over_http():
    client = MagicMock(spec=httpx.Client)
    client.request.return_value = _mock_response(
        {
            "success": True,
            "data": [
                {"Id": 1, "Name": "Relaunch", "clientId_c": {"Id": 5, "Name": "Acme"}},
                {"Id": 2, "Name": "Audit", "clientId_c": 6},
            ],
        }
    )

    with RecordWorkspace(CONFIG, client=client) as ws:
        projects = ws.clients.get_projects_by_client_id(5)

    assert [p["Id"] for p in projects] == [1]
    method, path = client.request.call_args.args
    assert (method, path) == ("POST", "/tables/project_c/records/query")
    client.close.assert_called_once()


def test_workspace_reads_env_when_no_config(monkeypatch):
    monkeypatch.setenv("RECORDBRICKS_BASE_URL", "https://env.example.test")
    monkeypatch.setenv("RECORDBRICKS_PROJECT_ID", "proj-env")
    monkeypatch.setenv("RECORDBRICKS_PUBLIC_KEY", "pk-env")

    ws = RecordWorkspace(client=MagicMock(spec=httpx.Client))

    assert ws.api.connection.base_url == "https://env.example.test"
    assert ws.api.connection.auth.project_id == "proj-env"


def test_workspace_without_env_config_fails(monkeypatch):
    monkeypatch.delenv("RECORDBRICKS_BASE_URL", raising=False)

    with pytest.raises(ConfigurationError):
        RecordWorkspace()


def test_unknown_table_raises():
    ws = RecordWorkspace(CONFIG, client=MagicMock(spec=httpx.Client))

    with pytest.raises(Exception, match="No service registered"):
        ws.service("invoice_c")
