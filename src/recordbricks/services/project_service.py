from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from recordbricks.connectors.api.client import RecordApiClient
from recordbricks.core.exceptions import ErrorPolicy
from recordbricks.core.utils import utc_now_iso
from recordbricks.services.base import TableService
from recordbricks.services.fields import coalesce, first_defined
from recordbricks.services.lookup import reference_id
from recordbricks.services.registry import ServiceRegistry, register_service

if TYPE_CHECKING:
    from recordbricks.services.milestone_service import MilestoneService

MILESTONE_TABLE = "milestone_c"


def _client_ref(data: Mapping[str, Any]) -> Any:
    return reference_id(coalesce(data, "clientId_c", "clientId"), "client")


@register_service(table_name="project_c")
class ProjectService(TableService):
    table_name = "project_c"
    entity = "project"
    entity_plural = "projects"
    fields = (
        "Name",
        "description_c",
        "status_c",
        "deadline_c",
        "deliverables_c",
        "createdAt_c",
        "startDate_c",
        "chatEnabled_c",
        "clientId_c",
        "Tags",
    )

    def __init__(
        self,
        api: RecordApiClient,
        *,
        error_policy: ErrorPolicy = ErrorPolicy.SUPPRESS,
        milestones: Optional["MilestoneService"] = None,
    ):
        super().__init__(api, error_policy=error_policy)
        self._milestones = milestones

    @property
    def milestones(self) -> "MilestoneService":
        if self._milestones is None:
            from recordbricks.bootstrap import load_builtin_services

            load_builtin_services()
            self._milestones = ServiceRegistry.get(MILESTONE_TABLE)(self.api, error_policy=self.error_policy)
        return self._milestones

    def _detail_fields(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "Name": coalesce(data, "Name", "name"),
            "description_c": coalesce(data, "description_c", "description"),
            "deadline_c": coalesce(data, "deadline_c", "deadline"),
            "deliverables_c": coalesce(data, "deliverables_c", "deliverables"),
            "startDate_c": coalesce(data, "startDate_c", "startDate"),
            "clientId_c": _client_ref(data),
        }

    def build_create_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            **self._detail_fields(data),
            "status_c": coalesce(data, "status_c", "status", default="Planning"),
            "chatEnabled_c": first_defined(data, "chatEnabled_c", "chatEnabled", default=True),
            "createdAt_c": utc_now_iso(),
            "Tags": coalesce(data, "Tags", default=[]),
        }

    def build_update_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            **self._detail_fields(data),
            "status_c": coalesce(data, "status_c", "status"),
            "chatEnabled_c": first_defined(data, "chatEnabled_c", "chatEnabled"),
            "Tags": coalesce(data, "Tags", default=[]),
        }

    # Milestones live in their own table; these delegate to MilestoneService.

    def get_milestones_by_project_id(self, project_id: Any) -> List[Dict[str, Any]]:
        return self.milestones.get_by_project_id(project_id)

    def create_milestone(self, project_id: Any, milestone_data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return self.milestones.create_for_project(project_id, milestone_data)

    def update_milestone(self, milestone_id: Any, milestone_data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return self.milestones.update(milestone_id, milestone_data)

    def delete_milestone(self, milestone_id: Any) -> bool:
        return self.milestones.delete(milestone_id)
