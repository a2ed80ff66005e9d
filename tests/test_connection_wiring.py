import pytest

from recordbricks.core.exceptions import ConfigurationError
from recordbricks.models.connection_config import ConnectionConfig
from recordbricks.providers.env_secrets_provider import EnvSecretsProvider
from recordbricks.wiring.connection_wiring import build_api_connection


class FakeSecretsProvider:
    def __init__(self, value):
        self.value = value
        self.calls: list[tuple[str, str]] = []

    def get_secret(self, vault_ref: str, secret_key: str):
        self.calls.append((vault_ref, secret_key))
        return self.value


def test_wiring_builds_runtime_types_from_config():
    cfg = ConnectionConfig(base_url="https://records.example.test", headers={"X-Test": "1"})

    conn = build_api_connection(cfg)

    assert conn.base_url == "https://records.example.test"
    assert conn.timeout_seconds == 30.0
    assert conn.headers == {"X-Test": "1"}
    assert conn.auth.kind == "none"


def test_inline_project_key_is_used_as_is():
    cfg = ConnectionConfig.model_validate(
        {
            "base_url": "https://records.example.test",
            "auth": {"kind": "project_key", "project_id": "proj-1", "public_key": "pk"},
        }
    )

    conn = build_api_connection(cfg)

    assert (conn.auth.kind, conn.auth.project_id, conn.auth.public_key) == ("project_key", "proj-1", "pk")


def test_public_key_resolves_from_secrets_provider():
    secrets_provider = FakeSecretsProvider("super-secret")
    cfg = ConnectionConfig.model_validate(
        {
            "base_url": "https://records.example.test",
            "auth": {
                "kind": "project_key",
                "project_id": "proj-1",
                "public_key_secret_ref": {"vault_ref": "scope1", "secret_key": "key1"},
            },
        }
    )

    conn = build_api_connection(cfg, secrets_provider=secrets_provider)

    assert secrets_provider.calls == [("scope1", "key1")]
    assert conn.auth.public_key == "super-secret"


def test_secret_ref_without_provider_fails():
    cfg = ConnectionConfig.model_validate(
        {
            "base_url": "https://records.example.test",
            "auth": {"kind": "bearer", "bearer_token_secret_ref": {"vault_ref": "s", "secret_key": "k"}},
        }
    )

    with pytest.raises(ConfigurationError, match="no secrets_provider"):
        build_api_connection(cfg)


def test_secret_ref_resolving_to_none_fails():
    cfg = ConnectionConfig.model_validate(
        {
            "base_url": "https://records.example.test",
            "auth": {
                "kind": "api_key",
                "api_key_name": "X-API-Key",
                "api_key_secret_ref": {"vault_ref": "s", "secret_key": "k"},
            },
        }
    )

    with pytest.raises(ConfigurationError, match="returned None"):
        build_api_connection(cfg, secrets_provider=FakeSecretsProvider(None))


def test_env_secrets_provider_reads_upper_cased_variable():
    provider = EnvSecretsProvider({"RECORDBRICKS_PUBLIC_KEY": "pk", "EMPTY_VALUE": ""})

    assert EnvSecretsProvider.variable_name("recordbricks", "public-key") == "RECORDBRICKS_PUBLIC_KEY"
    assert provider.get_secret("recordbricks", "public-key") == "pk"
    assert provider.get_secret("empty", "value") is None
    assert provider.get_secret("missing", "key") is None
