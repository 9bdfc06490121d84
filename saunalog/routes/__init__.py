from saunalog.routes.auth import router as auth_router
from saunalog.routes.sessions import router as sessions_router
from saunalog.routes.history import router as history_router

__all__ = [
    'auth_router',
    'sessions_router',
    'history_router',
]
