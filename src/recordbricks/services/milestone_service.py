from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from recordbricks.core.utils import utc_now_iso
from recordbricks.services.base import TableService
from recordbricks.services.fields import coalesce, compact, first_defined
from recordbricks.services.lookup import reference_id
from recordbricks.services.params import query_params, records_params, where
from recordbricks.services.registry import register_service


@register_service(table_name="milestone_c")
class MilestoneService(TableService):
    table_name = "milestone_c"
    entity = "milestone"
    entity_plural = "milestones"
    fields = (
        "Name",
        "title_c",
        "description_c",
        "dueDate_c",
        "isCompleted_c",
        "completedDate_c",
        "createdAt_c",
        "projectId_c",
    )
    order_by = "dueDate_c"

    def build_create_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "Name": coalesce(data, "Name", "title", "name"),
            "title_c": coalesce(data, "title_c", "title"),
            "description_c": coalesce(data, "description_c", "description", default=""),
            "dueDate_c": coalesce(data, "dueDate_c", "dueDate"),
            "isCompleted_c": coalesce(data, "isCompleted_c", default=False),
            "completedDate_c": None,
            "createdAt_c": utc_now_iso(),
            "projectId_c": reference_id(coalesce(data, "projectId_c", "projectId"), "project"),
        }

    def build_update_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        completed = data.get("isCompleted_c") or data.get("isCompleted")
        return {
            "Name": coalesce(data, "Name", "title", "name"),
            "title_c": coalesce(data, "title_c", "title"),
            "description_c": coalesce(data, "description_c", "description"),
            "dueDate_c": coalesce(data, "dueDate_c", "dueDate"),
            "isCompleted_c": first_defined(data, "isCompleted_c", "isCompleted"),
            "completedDate_c": utc_now_iso() if completed else None,
        }

    def get_by_project_id(self, project_id: Any) -> List[Dict[str, Any]]:
        """Milestones of one project, earliest due date first."""
        return self._fetch(
            lambda: query_params(
                self.fields,
                sort_field=self.order_by,
                conditions=where("projectId_c", [self.record_id(project_id, entity="project")]),
            ),
            context=f"Error fetching {self.entity_plural}",
        )

    def create_for_project(self, project_id: Any, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return self._write(
            "create",
            self.api.create_record,
            lambda: records_params(
                compact(self.build_create_record({**data, "projectId_c": self.record_id(project_id, entity="project")}))
            ),
        )
