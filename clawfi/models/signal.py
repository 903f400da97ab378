import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from clawfi.analyzer.parameters import safe_int
from clawfi.models.response import now_ms


class Severity(str, Enum):
    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SignalType(str, Enum):
    HONEYPOT = "honeypot"
    CONTRACT_RISK = "contract_risk"
    HOLDER_CONCENTRATION = "holder_concentration"


def new_signal_id(rule: str) -> str:
    return f"sig_{rule}_{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Signal:
    """
    A single risk signal.
    type is a plain string so signals from the primary API with types we
    don't know about still decode; SignalType members compare equal to it.
    """
    id: str
    type: str
    severity: Severity
    title: str
    summary: str
    timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": getattr(self.type, "value", self.type),
            "severity": self.severity.value,
            "title": self.title,
            "summary": self.summary,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Signal":
        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            severity=Severity(data["severity"]),
            title=str(data.get("title", "")),
            summary=str(data.get("summary", "")),
            timestamp=safe_int(data.get("timestamp")) or now_ms(),
        )
