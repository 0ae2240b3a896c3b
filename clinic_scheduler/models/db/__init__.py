from clinic_scheduler.models.db.base import Base, TimestampMixin

__all__ = ["Base", "TimestampMixin"]
