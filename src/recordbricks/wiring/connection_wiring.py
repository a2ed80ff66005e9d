from __future__ import annotations

from typing import Optional

from recordbricks.connectors.api.types import ApiAuth, ApiConnection
from recordbricks.core.exceptions import ConfigurationError
from recordbricks.core.secrets_provider import SecretsProvider
from recordbricks.models.connection_config import ConnectionConfig, SecretRefConfig


def _resolve_secret(
    inline: Optional[str],
    ref: Optional[SecretRefConfig],
    secrets_provider: Optional[SecretsProvider],
    *,
    label: str,
) -> str:
    if inline is not None:
        return inline
    if ref is None:
        raise ConfigurationError(f"{label} is not configured")
    if secrets_provider is None:
        raise ConfigurationError(f"{label}_secret_ref provided but no secrets_provider was passed")
    value = secrets_provider.get_secret(ref.vault_ref, ref.secret_key)
    if value is None:
        raise ConfigurationError(
            f"secrets_provider returned None for {label}_secret_ref={ref.vault_ref!r}/{ref.secret_key!r}"
        )
    return value


def _auth_from_config(cfg: ConnectionConfig, secrets_provider: Optional[SecretsProvider] = None) -> ApiAuth:
    auth = cfg.auth
    kind = auth.kind

    if kind == "none":
        return ApiAuth(kind="none")

    if kind == "project_key":
        return ApiAuth(
            kind="project_key",
            project_id=auth.project_id,
            public_key=_resolve_secret(auth.public_key, auth.public_key_secret_ref, secrets_provider, label="public_key"),
        )

    if kind == "bearer":
        return ApiAuth(
            kind="bearer",
            bearer_token=_resolve_secret(
                auth.bearer_token, auth.bearer_token_secret_ref, secrets_provider, label="bearer_token"
            ),
        )

    if kind == "api_key":
        return ApiAuth(
            kind="api_key",
            api_key_name=auth.api_key_name,
            api_key_value=_resolve_secret(
                auth.api_key_value, auth.api_key_secret_ref, secrets_provider, label="api_key"
            ),
        )

    raise ConfigurationError(f"Unsupported auth kind: {kind!r}")


def build_api_connection(
    cfg: ConnectionConfig,
    *,
    secrets_provider: Optional[SecretsProvider] = None,
) -> ApiConnection:
    # This wiring module is the only layer allowed to read Pydantic config.
    return ApiConnection(
        base_url=cfg.base_url,
        timeout_seconds=float(cfg.timeout_seconds),
        headers=dict(cfg.headers),
        auth=_auth_from_config(cfg, secrets_provider=secrets_provider),
    )
