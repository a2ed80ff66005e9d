from __future__ import annotations

from typing import Any, Dict, Optional, Union

import httpx

from recordbricks.bootstrap import load_builtin_services
from recordbricks.connectors.api.client import RecordApiClient
from recordbricks.core.exceptions import ErrorPolicy
from recordbricks.core.logger import configure_root_logger, get_logger
from recordbricks.core.secrets_provider import SecretsProvider
from recordbricks.models.recordbricks_config import RecordbricksConfig
from recordbricks.services.base import TableService
from recordbricks.services.client_service import ClientService
from recordbricks.services.milestone_service import MilestoneService
from recordbricks.services.project_service import ProjectService
from recordbricks.services.registry import ServiceRegistry
from recordbricks.wiring.connection_wiring import build_api_connection


class RecordWorkspace:
    """
    High-level entry point bundling one API client with the table services.

    Every service handed out shares the same RecordApiClient, so the HTTP
    connection pool is reused across tables.

    Example:
        >>> from recordbricks import RecordWorkspace
        >>> with RecordWorkspace({"connection": {"base_url": "https://records.example"}}) as ws:
        ...     clients = ws.clients.get_all()
        ...     projects = ws.clients.get_projects_by_client_id(clients[0]["Id"])
    """

    def __init__(
        self,
        config: Union[Dict[str, Any], RecordbricksConfig, None] = None,
        *,
        client: Optional[httpx.Client] = None,
        secrets_provider: Optional[SecretsProvider] = None,
        error_policy: Optional[ErrorPolicy] = None,
    ):
        """
        Args:
            config: A config dict, a validated RecordbricksConfig, or None to
                    read RECORDBRICKS_* environment variables.
            client: Optional pre-built httpx.Client (tests, custom transports).
            secrets_provider: Resolves *_secret_ref entries in the auth config.
            error_policy: Overrides the policy from config.
        """
        if config is None:
            config = RecordbricksConfig.from_env()
        elif isinstance(config, dict):
            config = RecordbricksConfig.from_dict(config)

        self.config = config
        self.error_policy = error_policy or config.policy

        configure_root_logger(config.log_level)
        self.log = get_logger(__name__)

        connection = build_api_connection(config.connection, secrets_provider=secrets_provider)
        self.api = RecordApiClient(connection, client=client)
        self._services: Dict[str, TableService] = {}

        load_builtin_services()
        self.log.debug(f"Workspace ready for {connection.base_url} (tables: {', '.join(ServiceRegistry.tables())})")

    def service(self, table_name: str) -> TableService:
        """Return the (cached) service registered for ``table_name``."""
        if table_name not in self._services:
            service_cls = ServiceRegistry.get(table_name)
            self._services[table_name] = service_cls(
                self.api, error_policy=self.error_policy, **self._collaborators(table_name)
            )
        return self._services[table_name]

    def _collaborators(self, table_name: str) -> Dict[str, TableService]:
        # services that join across tables get this workspace's cached instances
        if table_name == ClientService.table_name:
            return {"projects": self.service(ProjectService.table_name)}
        if table_name == ProjectService.table_name:
            return {"milestones": self.service(MilestoneService.table_name)}
        return {}

    @property
    def clients(self) -> ClientService:
        return self.service(ClientService.table_name)

    @property
    def projects(self) -> ProjectService:
        return self.service(ProjectService.table_name)

    @property
    def milestones(self) -> MilestoneService:
        return self.service(MilestoneService.table_name)

    def close(self) -> None:
        self.api.close()

    def __enter__(self) -> "RecordWorkspace":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
