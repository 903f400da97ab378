from typing import Dict, Iterable

from clawfi.models.signal import Signal, Severity

MAX_RISK_SCORE = 100

SEVERITY_WEIGHTS: Dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.LOW: 5,
    Severity.MEDIUM: 15,
    Severity.HIGH: 25,
    Severity.CRITICAL: 40,
}


def calculate_risk_score(signals: Iterable[Signal]) -> int:
    """
    Sum of severity weights, capped at 100. Weights are non-negative so
    the result is never below 0.
    """
    score = sum(SEVERITY_WEIGHTS.get(s.severity, 0) for s in signals)
    return min(MAX_RISK_SCORE, score)
