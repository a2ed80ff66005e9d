from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from recordbricks.core.secrets_provider import SecretsProvider

_NON_WORD = re.compile(r"[^A-Za-z0-9]+")


class EnvSecretsProvider(SecretsProvider):
    """Secrets provider that reads secrets from environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    @staticmethod
    def variable_name(vault_ref: str, secret_key: str) -> str:
        return _NON_WORD.sub("_", f"{vault_ref}_{secret_key}").upper()

    def get_secret(self, vault_ref: str, secret_key: str) -> Optional[str]:
        """Get a secret from the environment.

        Args:
            vault_ref: Prefix of the variable name (e.g. "recordbricks").
            secret_key: Suffix of the variable name (e.g. "public-key").

        Returns:
            The value of RECORDBRICKS_PUBLIC_KEY for the example above, or
            None if unset or empty.
        """
        return self._environ.get(self.variable_name(vault_ref, secret_key)) or None
