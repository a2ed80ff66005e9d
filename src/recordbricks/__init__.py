"""recordbricks.

RecordBricks - data-access services for low-code record APIs.

Table services (clients, projects, milestones) that map CRUD operations onto
a remote backend's record API, translating between loosely-shaped dicts and
the field-qualified request format the backend expects.

Public API for applications and scripts using the services.
"""

from recordbricks.core.exceptions import ErrorPolicy
from recordbricks.services.client_service import ClientService
from recordbricks.services.milestone_service import MilestoneService
from recordbricks.services.project_service import ProjectService
from recordbricks.workspace import RecordWorkspace

__version__ = "0.1.0"

__all__ = [
    "ClientService",
    "ErrorPolicy",
    "MilestoneService",
    "ProjectService",
    "RecordWorkspace",
]
