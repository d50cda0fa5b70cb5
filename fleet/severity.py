"""Severity enum for maintenance alert urgency."""

from enum import Enum
from typing import Optional


class Severity(Enum):
    """Alert severity levels."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


# Lower value = shown first
SEVERITY_PRIORITY = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
}


def severity_rank(severity: Optional[Severity]) -> int:
    """Sort rank for a severity; alerts without one rank last."""
    if severity is None:
        return len(SEVERITY_PRIORITY)
    return SEVERITY_PRIORITY[severity]
