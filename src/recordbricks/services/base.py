from __future__ import annotations

import json
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Tuple

from recordbricks.connectors.api.client import RecordApiClient
from recordbricks.core.contracts import RecordResponse, RecordResult
from recordbricks.core.exceptions import (
    ErrorPolicy,
    FailureHandler,
    InvalidRecordIdError,
    RecordbricksException,
    RecordOperationError,
)
from recordbricks.core.logger import get_logger
from recordbricks.core.utils import parse_int
from recordbricks.services.fields import compact
from recordbricks.services.params import delete_params, query_params, records_params

_GERUNDS = {"create": "creating", "update": "updating", "delete": "deleting"}


class TableService:
    """
    CRUD facade over one table of the record API.

    Subclasses declare the table and its field list and implement the two
    record builders; every operation follows the same sequence: build the
    parameter object, call the API client once, check ``success``, split
    ``results`` into successes and failures, log, and return.

    Failures never escape under ErrorPolicy.SUPPRESS (the default): reads
    return an empty list or None, writes return None, deletes return False.
    """

    table_name: ClassVar[str]
    entity: ClassVar[str]
    entity_plural: ClassVar[str]
    fields: ClassVar[Tuple[str, ...]]
    order_by: ClassVar[Optional[str]] = "Name"

    def __init__(
        self,
        api: RecordApiClient,
        *,
        error_policy: ErrorPolicy = ErrorPolicy.SUPPRESS,
    ):
        self.api = api
        self.error_policy = error_policy
        self.log = get_logger(f"recordbricks.services.{self.__class__.__name__}")
        self._failures = FailureHandler(policy=error_policy, logger=self.log)

    # -----------------
    # Record builders
    # -----------------

    def build_create_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def build_update_record(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def record_id(self, value: Any, *, entity: Optional[str] = None) -> int:
        record_id = parse_int(value)
        if record_id is None or record_id <= 0:
            raise InvalidRecordIdError(entity or self.entity, value)
        return record_id

    def fetch_params(self) -> Dict[str, Any]:
        return query_params(self.fields, sort_field=self.order_by)

    # -----------------
    # Operations
    # -----------------

    def get_all(self) -> List[Dict[str, Any]]:
        return self._fetch(self.fetch_params, context=f"Error fetching {self.entity_plural}")

    def get_by_id(self, record_id: Any) -> Optional[Dict[str, Any]]:
        context = f"Error fetching {self.entity} with ID {record_id}"
        try:
            response = self.api.get_record_by_id(self.table_name, self.record_id(record_id), query_params(self.fields))
        except RecordbricksException as exc:
            self._failures.handle(context, exc)
            return None

        if not response.success:
            self._failures.rejected(context, response.message)
            return None
        return response.data

    def create(self, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return self._write(
            "create",
            self.api.create_record,
            lambda: records_params(compact(self.build_create_record(data))),
        )

    def update(self, record_id: Any, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return self._write(
            "update",
            self.api.update_record,
            lambda: records_params({"Id": self.record_id(record_id), **compact(self.build_update_record(data))}),
        )

    def delete(self, record_id: Any) -> bool:
        context = f"Error deleting {self.entity}"
        try:
            response = self.api.delete_record(self.table_name, delete_params(self.record_id(record_id)))
        except RecordbricksException as exc:
            self._failures.handle(context, exc)
            return False

        if not response.success:
            self._failures.rejected(context, response.message)
            return False
        if response.results is None:
            return False
        return bool(self._accepted("delete", response))

    # -----------------
    # Internals
    # -----------------

    def _fetch(self, build: Callable[[], Dict[str, Any]], *, context: str) -> List[Dict[str, Any]]:
        try:
            response = self.api.fetch_records(self.table_name, build())
        except RecordbricksException as exc:
            self._failures.handle(context, exc)
            return []

        if not response.success:
            self._failures.rejected(context, response.message)
            return []
        return response.data or []

    def _write(
        self,
        action: str,
        send: Callable[[str, Dict[str, Any]], RecordResponse],
        build: Callable[[], Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        context = f"Error {_GERUNDS[action]} {self.entity}"
        try:
            response = send(self.table_name, build())
        except RecordbricksException as exc:
            self._failures.handle(context, exc)
            return None

        if not response.success:
            self._failures.rejected(context, response.message)
            return None
        if response.results is None:
            return None

        successful = self._accepted(action, response)
        return successful[0].data if successful else None

    def _accepted(self, action: str, response: RecordResponse) -> List[RecordResult]:
        successful, failed = response.split_results()
        if failed:
            self._log_failed(action, failed)
            if not successful and self.error_policy == ErrorPolicy.RAISE:
                raise RecordOperationError(f"Failed to {action} {self.entity}: {len(failed)} records rejected")
        return successful

    def _log_failed(self, action: str, failed: List[RecordResult]) -> None:
        dump = json.dumps([r.to_dict() for r in failed], default=str)
        self.log.error(f"Failed to {action} {self.entity} {len(failed)} records:{dump}")
        for record in failed:
            for error in record.errors:
                self.log.error(f"{error.field_label}: {error.message}")
            if record.message:
                self.log.error(record.message)
