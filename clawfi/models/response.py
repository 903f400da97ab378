import time
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ApiResponse(Generic[T]):
    """
    Uniform result envelope returned by every client operation.
    """
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    timestamp: int = field(default_factory=now_ms)

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: Optional[str]) -> "ApiResponse[T]":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        out: dict = {"success": self.success, "timestamp": self.timestamp}
        if self.data is not None:
            out["data"] = _serialize(self.data)
        if self.error is not None:
            out["error"] = self.error
        return out


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    return value
