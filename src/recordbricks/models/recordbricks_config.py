from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel

from recordbricks.core.exceptions import ConfigurationError, ErrorPolicy
from recordbricks.models.connection_config import ConnectionConfig

ENV_PREFIX = "RECORDBRICKS_"


class RecordbricksConfig(BaseModel):
    connection: ConnectionConfig

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    error_policy: Literal["suppress", "raise"] = "suppress"

    @property
    def policy(self) -> ErrorPolicy:
        return ErrorPolicy(self.error_policy)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordbricksConfig":
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RecordbricksConfig":
        """Load a JSON or YAML config file."""
        config_file = Path(path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(config_file, "r") as f:
            if config_file.suffix == ".json":
                data = json.load(f)
            elif config_file.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported config format: {config_file.suffix}. Use .json or .yaml"
                )

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
        return cls.model_validate(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RecordbricksConfig":
        """
        Build a config from RECORDBRICKS_* environment variables.

        RECORDBRICKS_BASE_URL is required. When RECORDBRICKS_PROJECT_ID and
        RECORDBRICKS_PUBLIC_KEY are both set, project_key auth is used.
        """
        env = os.environ if environ is None else environ

        base_url = env.get(f"{ENV_PREFIX}BASE_URL")
        if not base_url:
            raise ConfigurationError(f"{ENV_PREFIX}BASE_URL is not set")

        connection: Dict[str, Any] = {"base_url": base_url}

        timeout = env.get(f"{ENV_PREFIX}TIMEOUT_SECONDS")
        if timeout:
            connection["timeout_seconds"] = float(timeout)

        project_id = env.get(f"{ENV_PREFIX}PROJECT_ID")
        public_key = env.get(f"{ENV_PREFIX}PUBLIC_KEY")
        if project_id and public_key:
            connection["auth"] = {"kind": "project_key", "project_id": project_id, "public_key": public_key}
        elif project_id or public_key:
            raise ConfigurationError(
                f"{ENV_PREFIX}PROJECT_ID and {ENV_PREFIX}PUBLIC_KEY must be set together"
            )

        data: Dict[str, Any] = {"connection": connection}
        if env.get(f"{ENV_PREFIX}LOG_LEVEL"):
            data["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"].upper()
        if env.get(f"{ENV_PREFIX}ERROR_POLICY"):
            data["error_policy"] = env[f"{ENV_PREFIX}ERROR_POLICY"].lower()
        return cls.model_validate(data)
