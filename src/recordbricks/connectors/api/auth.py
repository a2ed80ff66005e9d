from __future__ import annotations

from typing import Dict

from recordbricks.connectors.api.types import ApiAuth

PROJECT_ID_HEADER = "X-Project-Id"
PUBLIC_KEY_HEADER = "X-Public-Key"


def build_auth_headers(auth: ApiAuth) -> Dict[str, str]:
    if auth.kind == "none":
        return {}

    if auth.kind == "project_key":
        if not auth.project_id or not auth.public_key:
            raise ValueError("project_key auth requires project_id and public_key")
        return {PROJECT_ID_HEADER: auth.project_id, PUBLIC_KEY_HEADER: auth.public_key}

    if auth.kind == "bearer":
        if not auth.bearer_token:
            raise ValueError("bearer auth requires bearer_token")
        return {"Authorization": f"Bearer {auth.bearer_token}"}

    if auth.kind == "api_key":
        if not auth.api_key_name or not auth.api_key_value:
            raise ValueError("api_key auth requires api_key_name and api_key_value")
        return {auth.api_key_name: auth.api_key_value}

    raise ValueError(f"Unsupported auth kind: {auth.kind!r}")
