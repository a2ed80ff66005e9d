"""
Example: Working with clients, projects and milestones through RecordWorkspace.

Connection settings come from a config file here; without one the workspace
reads RECORDBRICKS_BASE_URL / RECORDBRICKS_PROJECT_ID / RECORDBRICKS_PUBLIC_KEY.
"""

from recordbricks import ErrorPolicy, RecordWorkspace
from recordbricks.models.recordbricks_config import RecordbricksConfig
from recordbricks.providers.env_secrets_provider import EnvSecretsProvider

config = RecordbricksConfig.from_file("examples/recordbricks.yaml")


# =============================================================================
# Example 1: Default policy - failures are logged, fallbacks returned
# =============================================================================
with RecordWorkspace(config, secrets_provider=EnvSecretsProvider()) as ws:
    client = ws.clients.create({"name": "Acme", "email": "office@acme.example", "industry": "Retail"})
    if client is None:
        raise SystemExit("client was not created, see log output")

    project = ws.projects.create({"name": "Website relaunch", "clientId": client["Id"], "deadline": "2026-12-01"})
    ws.projects.create_milestone(project["Id"], {"title": "Kickoff", "dueDate": "2026-11-03"})

    for p in ws.clients.get_projects_by_client_id(client["Id"]):
        milestones = ws.projects.get_milestones_by_project_id(p["Id"])
        print(f"{p['Name']}: {len(milestones)} milestone(s)")


# =============================================================================
# Example 2: Strict policy - failures raise RecordbricksException subclasses
# =============================================================================
with RecordWorkspace(config, secrets_provider=EnvSecretsProvider(), error_policy=ErrorPolicy.RAISE) as ws:
    ws.clients.delete(client["Id"])
