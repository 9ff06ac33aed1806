"""HTTP API routers."""

from feedback_collector.api.auth import router as auth_router
from feedback_collector.api.feedback import router as feedback_router
from feedback_collector.api.health import router as health_router
from feedback_collector.api.rooms import router as rooms_router

__all__ = [
    "auth_router",
    "feedback_router",
    "health_router",
    "rooms_router",
]
