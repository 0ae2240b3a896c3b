"""
Scheduling Application Services
"""

from .capacity_policy import CapacityPolicy, free_plan_from_settings, limit_reached_message
from .conflict_detector import ConflictCheckResult, ConflictDetector

__all__ = [
    "CapacityPolicy",
    "ConflictCheckResult",
    "ConflictDetector",
    "free_plan_from_settings",
    "limit_reached_message",
]
