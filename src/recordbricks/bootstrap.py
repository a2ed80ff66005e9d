from __future__ import annotations

import importlib
import sys
from typing import Iterable


BUILTIN_SERVICE_MODULES: tuple[str, ...] = (
    "recordbricks.services.client_service",
    "recordbricks.services.project_service",
    "recordbricks.services.milestone_service",
)


_LOADED = False


def load_builtin_services(*, reload: bool = False, modules: Iterable[str] = BUILTIN_SERVICE_MODULES) -> None:
    """Import built-in service modules so their decorators register them.

    In production, call with reload=False (default) so imports are cheap.
    In tests, call with reload=True after clearing the registry to re-run decorators.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    if reload:
        from recordbricks.services.registry import ServiceRegistry

        ServiceRegistry.clear()

    for module_name in modules:
        if reload:
            sys.modules.pop(module_name, None)
        importlib.import_module(module_name)

    _LOADED = True
