from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from recordbricks.connectors.api.auth import build_auth_headers
from recordbricks.connectors.api.types import ApiConnection, ApiRequest
from recordbricks.core.contracts import RecordResponse
from recordbricks.core.exceptions import RecordApiError
from recordbricks.core.logger import get_logger

log = get_logger(__name__)


def _records_path(table_name: str) -> str:
    return f"/tables/{quote(table_name, safe='')}/records"


def _error_message(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = response.text[:200] if response.text else ""
    return text or response.reason_phrase or "request failed"


class RecordApiClient:
    """HTTP client for the record API.

    Mirrors the backend SDK surface: one method per record operation, each
    taking a table name and a parameter object whose keys are sent as-is.
    """

    def __init__(
        self,
        connection: ApiConnection,
        *,
        client: Optional[httpx.Client] = None,
    ):
        self.connection = connection

        headers = dict(connection.headers)
        headers.update(build_auth_headers(connection.auth))

        self._client = client or httpx.Client(
            base_url=connection.base_url,
            timeout=connection.timeout_seconds,
            headers=headers,
        )

    def fetch_records(self, table_name: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send(ApiRequest("POST", f"{_records_path(table_name)}/query"), params)

    def get_record_by_id(self, table_name: str, record_id: int, params: Dict[str, Any]) -> RecordResponse:
        return self._send(ApiRequest("POST", f"{_records_path(table_name)}/{int(record_id)}/query"), params)

    def create_record(self, table_name: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send(ApiRequest("POST", _records_path(table_name)), params)

    def update_record(self, table_name: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send(ApiRequest("PATCH", _records_path(table_name)), params)

    def delete_record(self, table_name: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send(ApiRequest("DELETE", _records_path(table_name)), params)

    def _send(self, request: ApiRequest, params: Dict[str, Any]) -> RecordResponse:
        log.debug(f"{request.method} {request.endpoint}")
        try:
            resp = self._client.request(request.method, request.endpoint, json=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RecordApiError(_error_message(exc.response), status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            raise RecordApiError(f"{request.method} {request.endpoint} failed: {exc}") from exc

        try:
            data: Any = resp.json()
        except ValueError as exc:
            content_type = resp.headers.get("content-type", "unknown")
            raise RecordApiError(
                f"Failed to parse record API response as JSON. "
                f"Content-Type: {content_type}. Response preview: {resp.text[:500]}",
                status_code=resp.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise RecordApiError(
                f"Unexpected record API response type {type(data).__name__} for {request.endpoint}",
                status_code=resp.status_code,
            )
        return RecordResponse.from_dict(data)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RecordApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
