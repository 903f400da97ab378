from typing import List, Optional

from clawfi.analyzer.parameters import safe_float, flag_set
from clawfi.models.raw import GoPlusTokenSecurity
from clawfi.models.response import now_ms
from clawfi.models.signal import Signal, SignalType, Severity, new_signal_id

# Thresholds in percent
SELL_TAX_HIGH = 10
SELL_TAX_CRITICAL = 30
TOP10_CONCENTRATION_MEDIUM = 50
TOP10_CONCENTRATION_HIGH = 70


def sell_tax_percent(security: GoPlusTokenSecurity) -> float:
    return safe_float(security.sell_tax) * 100


def buy_tax_percent(security: GoPlusTokenSecurity) -> float:
    return safe_float(security.buy_tax) * 100


def top10_holder_percent(security: GoPlusTokenSecurity) -> float:
    return sum(safe_float(h.percent) for h in security.holders[:10]) * 100


def derive_signals(security: Optional[GoPlusTokenSecurity]) -> List[Signal]:
    """
    Maps a GoPlus security record to risk signals.

    Rules are checked independently and in a fixed order, so the output
    order is rule order, not severity order. All signals of one call
    share its timestamp.
    """
    signals: List[Signal] = []
    if security is None:
        return signals

    ts = now_ms()

    def add(rule: str, sig_type: SignalType, severity: Severity, title: str, summary: str):
        signals.append(Signal(
            id=new_signal_id(rule),
            type=sig_type.value,
            severity=severity,
            title=title,
            summary=summary,
            timestamp=ts,
        ))

    # 1. Honeypot
    if flag_set(security.is_honeypot):
        add("honeypot", SignalType.HONEYPOT, Severity.CRITICAL,
            "Honeypot Detected", "This token cannot be sold - likely a scam")

    # 2. Ownership & minting
    if flag_set(security.is_mintable):
        add("mintable", SignalType.CONTRACT_RISK, Severity.HIGH,
            "Mintable Token", "Token supply can be increased by owner")

    if flag_set(security.hidden_owner):
        add("hidden", SignalType.CONTRACT_RISK, Severity.HIGH,
            "Hidden Owner", "Contract has hidden owner functions")

    if not flag_set(security.is_open_source):
        add("unverified", SignalType.CONTRACT_RISK, Severity.MEDIUM,
            "Unverified Contract", "Contract source code is not verified")

    # 3. Taxes
    sell_tax = sell_tax_percent(security)
    if sell_tax > SELL_TAX_HIGH:
        severity = Severity.CRITICAL if sell_tax > SELL_TAX_CRITICAL else Severity.HIGH
        add("tax", SignalType.CONTRACT_RISK, severity,
            "High Sell Tax", f"Sell tax is {sell_tax:.1f}%")

    if flag_set(security.is_blacklisted):
        add("blacklist", SignalType.CONTRACT_RISK, Severity.MEDIUM,
            "Blacklist Enabled", "Contract can blacklist addresses")

    # 4. Holder concentration (top 10)
    top10 = top10_holder_percent(security)
    if top10 > TOP10_CONCENTRATION_MEDIUM:
        severity = Severity.HIGH if top10 > TOP10_CONCENTRATION_HIGH else Severity.MEDIUM
        add("concentration", SignalType.HOLDER_CONCENTRATION, severity,
            "High Holder Concentration", f"Top 10 holders control {top10:.1f}%")

    return signals


def honeypot_reason(security: Optional[GoPlusTokenSecurity]) -> Optional[str]:
    """
    Broader honeypot check than the signal rule: also catches tokens that
    can't be fully sold or carry a sell tax above 50%.
    """
    if security is None:
        return None
    if flag_set(security.is_honeypot):
        return "Flagged as honeypot"
    if flag_set(security.cannot_sell_all):
        return "Cannot sell all tokens"
    if safe_float(security.sell_tax) > 0.5:
        return "Sell tax over 50%"
    return None
