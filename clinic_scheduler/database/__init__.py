from clinic_scheduler.database.async_db import (
    AsyncSessionLocal,
    close_async_engine,
    get_async_db,
)

__all__ = [
    "AsyncSessionLocal",
    "close_async_engine",
    "get_async_db",
]
