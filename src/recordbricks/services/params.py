from __future__ import annotations

from typing import Any, Dict, Iterable, List, Literal, Optional, Sequence

SortType = Literal["ASC", "DESC"]
Operator = Literal["EqualTo", "NotEqualTo", "GreaterThan", "LessThan", "Contains"]


def field_list(names: Iterable[str]) -> List[Dict[str, Any]]:
    return [{"field": {"Name": name}} for name in names]


def order_by(field_name: str, sorttype: SortType = "ASC") -> List[Dict[str, str]]:
    return [{"fieldName": field_name, "sorttype": sorttype}]


def where(field_name: str, values: Sequence[Any], operator: Operator = "EqualTo") -> List[Dict[str, Any]]:
    return [{"FieldName": field_name, "Operator": operator, "Values": list(values)}]


def query_params(
    fields: Iterable[str],
    *,
    sort_field: Optional[str] = None,
    sorttype: SortType = "ASC",
    conditions: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Build a fetch parameter object in the record API's key spelling."""
    params: Dict[str, Any] = {"fields": field_list(fields)}
    if conditions:
        params["where"] = conditions
    if sort_field:
        params["orderBy"] = order_by(sort_field, sorttype)
    return params


def records_params(*records: Dict[str, Any]) -> Dict[str, Any]:
    return {"records": list(records)}


def delete_params(*record_ids: int) -> Dict[str, Any]:
    return {"RecordIds": list(record_ids)}
