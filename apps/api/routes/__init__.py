from .calendar import router as calendar_router
from .meta import router as meta_router

__all__ = [
    "calendar_router",
    "meta_router",
]
