"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class Trend(str, Enum):
    """Direction of a fitted daily-sales slope"""

    UP = "UP"
    DOWN = "DOWN"
    STABLE = "STABLE"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"  # Too few sale records, no forecast possible


class Urgency(str, Enum):
    """Stock health derived from days of stock"""

    CRITICAL = "CRITICAL"
    LOW = "LOW"
    OK = "OK"
    OVERSTOCK = "OVERSTOCK"


class Severity(str, Enum):
    """Anomaly severity levels"""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AnomalyType(str, Enum):
    """Kinds of anomalies raised by the detector"""

    STOCK_ERROR = "STOCK_ERROR"  # Negative stock observed
    SALES_DROP = "SALES_DROP"
    SALES_SPIKE = "SALES_SPIKE"
    SLOW_MOVING = "SLOW_MOVING"
    DEADSTOCK = "DEADSTOCK"
    MARGIN = "MARGIN"


class EvaluationStatus(str, Enum):
    """Margin Guard verdicts"""

    APPROVED = "APPROVED"
    RISKY = "RISKY"
    BLOCKED = "BLOCKED"


class RejectionReason(str, Enum):
    """Why a sale record was left out of a daily series"""

    BEFORE_WINDOW = "before_window"
    AFTER_WINDOW = "after_window"
    PRODUCT_MISMATCH = "product_mismatch"


class PromotionType(str, Enum):
    """Promotion proposals generated from stock signals"""

    DEADSTOCK_CLEARANCE = "DEADSTOCK_CLEARANCE"
    SLOW_MOVER = "SLOW_MOVER"
    BUNDLE = "BUNDLE"
    VOLUME_DISCOUNT = "VOLUME_DISCOUNT"



class MarketingAlertType(str, Enum):
    """What a marketing alert asks of the reader"""

    ACTION_REQUIRED = "ACTION_REQUIRED"
    OPPORTUNITY = "OPPORTUNITY"
    INFO = "INFO"

SEVERITY_ORDER: dict[Severity, int] = {
    Severity.HIGH: 0,
    Severity.MEDIUM: 1,
    Severity.LOW: 2,
}
