"""
Scheduling Domain Services
"""

from .conflict_rules import find_conflict, is_conflicting

__all__ = ["find_conflict", "is_conflicting"]
