from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class FieldError:
    field_label: Optional[str]
    message: Optional[str]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FieldError":
        return cls(field_label=raw.get("fieldLabel"), message=raw.get("message"))

    def to_dict(self) -> Dict[str, Any]:
        return {"fieldLabel": self.field_label, "message": self.message}


@dataclass
class RecordResult:
    """One entry of the ``results`` list returned by write operations."""

    success: bool
    data: Any = None
    message: Optional[str] = None
    errors: List[FieldError] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RecordResult":
        return cls(
            success=bool(raw.get("success")),
            data=raw.get("data"),
            message=raw.get("message"),
            errors=[FieldError.from_dict(e) for e in raw.get("errors") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success}
        if self.data is not None:
            out["data"] = self.data
        if self.message is not None:
            out["message"] = self.message
        if self.errors:
            out["errors"] = [e.to_dict() for e in self.errors]
        return out


@dataclass
class RecordResponse:
    """Parsed reply of a single record API call.

    ``results`` stays None when the reply had no ``results`` key, which
    services treat differently from an empty list.
    """

    success: bool
    message: Optional[str] = None
    data: Any = None
    results: Optional[List[RecordResult]] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RecordResponse":
        results = raw.get("results")
        return cls(
            success=bool(raw.get("success")),
            message=raw.get("message"),
            data=raw.get("data"),
            results=[RecordResult.from_dict(r) for r in results] if results is not None else None,
        )

    def split_results(self) -> Tuple[List[RecordResult], List[RecordResult]]:
        """Return (successful, failed) results."""
        results = self.results or []
        return [r for r in results if r.success], [r for r in results if not r.success]

    def __repr__(self) -> str:
        """Custom repr that truncates large data to keep log lines readable."""
        if self.data is None:
            data_preview = "None"
        elif isinstance(self.data, list):
            count = len(self.data)
            if count <= 3:
                data_preview = repr(self.data)
            else:
                data_preview = f"[{self.data[0]!r}, {self.data[1]!r}, ... +{count-2} more]"
        else:
            data_preview = repr(self.data)

        parts = [f"RecordResponse(success={self.success}"]
        if self.message:
            parts.append(f", message={self.message!r}")
        parts.append(f", data={data_preview}")
        if self.results is not None:
            ok, failed = self.split_results()
            parts.append(f", results=<{len(ok)} ok, {len(failed)} failed>")
        parts.append(")")
        return "".join(parts)
