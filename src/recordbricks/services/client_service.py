from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from recordbricks.connectors.api.client import RecordApiClient
from recordbricks.core.exceptions import ErrorPolicy, RecordbricksException
from recordbricks.core.utils import utc_now_iso
from recordbricks.services.base import TableService
from recordbricks.services.fields import coalesce
from recordbricks.services.lookup import record_lookup_id
from recordbricks.services.registry import ServiceRegistry, register_service

if TYPE_CHECKING:
    from recordbricks.services.project_service import ProjectService

PROJECT_TABLE = "project_c"


@register_service(table_name="client_c")
class ClientService(TableService):
    table_name = "client_c"
    entity = "client"
    entity_plural = "clients"
    fields = (
        "Name",
        "company_c",
        "email_c",
        "phone_c",
        "website_c",
        "address_c",
        "industry_c",
        "status_c",
        "createdAt_c",
        "Tags",
    )

    def __init__(
        self,
        api: RecordApiClient,
        *,
        error_policy: ErrorPolicy = ErrorPolicy.SUPPRESS,
        projects: Optional["ProjectService"] = None,
    ):
        super().__init__(api, error_policy=error_policy)
        self._projects = projects

    @property
    def projects(self) -> "ProjectService":
        """Project service sharing this service's API client, resolved on first use."""
        if self._projects is None:
            from recordbricks.bootstrap import load_builtin_services

            load_builtin_services()
            self._projects = ServiceRegistry.get(PROJECT_TABLE)(self.api, error_policy=self.error_policy)
        return self._projects

    def _contact_fields(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "Name": coalesce(data, "Name", "name"),
            "company_c": coalesce(data, "company_c", "company"),
            "email_c": coalesce(data, "email_c", "email"),
            "phone_c": coalesce(data, "phone_c", "phone"),
            "website_c": coalesce(data, "website_c", "website"),
            "address_c": coalesce(data, "address_c", "address"),
            "industry_c": coalesce(data, "industry_c", "industry"),
        }

    def build_create_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            **self._contact_fields(data),
            "status_c": coalesce(data, "status_c", "status", default="Active"),
            "createdAt_c": utc_now_iso(),
            "Tags": coalesce(data, "Tags", default=[]),
        }

    def build_update_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            **self._contact_fields(data),
            "status_c": coalesce(data, "status_c", "status"),
            "Tags": coalesce(data, "Tags", default=[]),
        }

    def get_projects_by_client_id(self, client_id: Any) -> List[Dict[str, Any]]:
        """Return the projects whose client lookup points at ``client_id``."""
        try:
            wanted = self.record_id(client_id)
            projects = self.projects.get_all()
        except RecordbricksException as exc:
            self._failures.handle("Error fetching projects for client", exc)
            return []

        return [p for p in projects if record_lookup_id(p, "clientId_c", "clientId") == wanted]
