"""
Shared utilities used across domains.
"""

from clinic_scheduler.core.shared.logger import (
    ContextLogger,
    configure_logging,
    get_repository_logger,
    get_use_case_logger,
)

__all__ = [
    "ContextLogger",
    "configure_logging",
    "get_repository_logger",
    "get_use_case_logger",
]
