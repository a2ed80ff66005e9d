from typing import Any, Mapping, Optional

from recordbricks.core.exceptions import InvalidRecordIdError
from recordbricks.core.utils import parse_int
from recordbricks.services.fields import MISSING


def lookup_id(value: Any) -> Any:
    """Reduce a lookup field to its id.

    The backend returns lookups either as a bare id or as an embedded record
    such as ``{"Id": 3, "Name": "Acme"}``.
    """
    if isinstance(value, Mapping):
        return value.get("Id")
    return value


def reference_id(value: Any, entity: str) -> Any:
    """
    Coerce a lookup value given by the caller into the id to write.

    Empty values (MISSING, None, "") pass through unchanged, so a caller can
    leave the lookup alone or clear it. Anything else must name a positive
    record id, otherwise InvalidRecordIdError is raised.

        >>> reference_id({"Id": "12", "Name": "Acme"}, "client")
        12
    """
    if value is None or value is MISSING or value == "":
        return value
    ref = parse_int(lookup_id(value))
    if ref is None or ref <= 0:
        raise InvalidRecordIdError(entity, value)
    return ref


def record_lookup_id(record: Mapping[str, Any], *fields: str) -> Optional[int]:
    """Return the id referenced by the first readable lookup among ``fields``."""
    for name in fields:
        ref = lookup_id(record.get(name))
        parsed = parse_int(ref) if ref else None
        if parsed is not None:
            return parsed
    return None
