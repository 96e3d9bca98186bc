"""Route handlers for the Web API."""

from readtrack.web.routes.health import router as health_router
from readtrack.web.routes.auth import router as auth_router
from readtrack.web.routes.users import router as users_router
from readtrack.web.routes.books import router as books_router
from readtrack.web.routes.leaderboard import router as leaderboard_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "books_router",
    "leaderboard_router",
]
