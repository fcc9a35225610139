"""
Anomaly alert data model.
"""

from dataclasses import dataclass

from .enums import AnomalyType, Severity


@dataclass(frozen=True)
class AnomalyAlert:
    type: AnomalyType
    severity: Severity
    product_id: str
    product_name: str
    message: str
    value: float
    expected_value: float | None = None
    z_score: float | None = None
