from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional


HttpMethod = Literal["POST", "PATCH", "DELETE"]


@dataclass(frozen=True)
class ApiAuth:
    kind: Literal["none", "project_key", "bearer", "api_key"] = "none"

    project_id: Optional[str] = None
    public_key: Optional[str] = None

    bearer_token: Optional[str] = None

    api_key_name: Optional[str] = None
    api_key_value: Optional[str] = None


@dataclass(frozen=True)
class ApiConnection:
    base_url: str
    timeout_seconds: float = 30.0
    headers: Dict[str, str] = field(default_factory=dict)
    auth: ApiAuth = field(default_factory=ApiAuth)


@dataclass(frozen=True)
class ApiRequest:
    method: HttpMethod
    endpoint: str
