from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, List, Optional, Type

from recordbricks.core.exceptions import ServiceRegistryError


class ServiceRegistry:
    _registry: ClassVar[Dict[str, Type[Any]]] = {}

    @classmethod
    def register(
        cls,
        *,
        table_name: str,
        service_class: Type[Any],
        overwrite: bool = False,
    ) -> None:
        if not overwrite and table_name in cls._registry:
            existing = cls._registry[table_name]
            raise ServiceRegistryError(f"Service already registered for table_name={table_name!r}: {existing}")
        cls._registry[table_name] = service_class

    @classmethod
    def get(cls, table_name: str) -> Type[Any]:
        try:
            return cls._registry[table_name]
        except KeyError as exc:
            raise ServiceRegistryError(f"No service registered for table_name={table_name!r}") from exc

    @classmethod
    def try_get(cls, table_name: str) -> Optional[Type[Any]]:
        return cls._registry.get(table_name)

    @classmethod
    def tables(cls) -> List[str]:
        return sorted(cls._registry)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_service(
    *,
    table_name: str,
    overwrite: bool = False,
) -> Callable[[Type[Any]], Type[Any]]:
    def decorator(service_class: Type[Any]) -> Type[Any]:
        ServiceRegistry.register(
            table_name=table_name,
            service_class=service_class,
            overwrite=overwrite,
        )
        return service_class

    return decorator
