from __future__ import annotations

from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, PositiveFloat, model_validator


class SecretRefConfig(BaseModel):
    """Reference to a secret stored in a vault/backend.

    For EnvSecretsProvider this maps to the variable <VAULT_REF>_<SECRET_KEY>.
    """

    vault_ref: str
    secret_key: str


class AuthNoneConfig(BaseModel):
    kind: Literal["none"] = "none"


class AuthProjectKeyConfig(BaseModel):
    kind: Literal["project_key"] = "project_key"

    project_id: str
    public_key: Optional[str] = None
    public_key_secret_ref: Optional[SecretRefConfig] = None

    @model_validator(mode="after")
    def _validate_secret_source(self) -> "AuthProjectKeyConfig":
        if self.public_key is None and self.public_key_secret_ref is None:
            raise ValueError("project_key auth requires either public_key or public_key_secret_ref")
        return self


class AuthBearerConfig(BaseModel):
    kind: Literal["bearer"] = "bearer"

    bearer_token: Optional[str] = None
    bearer_token_secret_ref: Optional[SecretRefConfig] = None

    @model_validator(mode="after")
    def _validate_secret_source(self) -> "AuthBearerConfig":
        if self.bearer_token is None and self.bearer_token_secret_ref is None:
            raise ValueError("bearer auth requires either bearer_token or bearer_token_secret_ref")
        return self


class AuthApiKeyConfig(BaseModel):
    kind: Literal["api_key"] = "api_key"

    api_key_name: str
    api_key_value: Optional[str] = None
    api_key_secret_ref: Optional[SecretRefConfig] = None

    @model_validator(mode="after")
    def _validate_secret_source(self) -> "AuthApiKeyConfig":
        if self.api_key_value is None and self.api_key_secret_ref is None:
            raise ValueError("api_key auth requires either api_key_value or api_key_secret_ref")
        return self


AuthConfig = Annotated[
    Union[
        AuthNoneConfig,
        AuthProjectKeyConfig,
        AuthBearerConfig,
        AuthApiKeyConfig,
    ],
    Field(discriminator="kind"),
]


class ConnectionConfig(BaseModel):
    base_url: str
    timeout_seconds: PositiveFloat = 30.0
    headers: Dict[str, str] = Field(default_factory=dict)

    auth: AuthConfig = Field(default_factory=AuthNoneConfig)
