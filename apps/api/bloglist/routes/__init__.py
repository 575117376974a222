"""Route modules."""

from .login import router as login_router
from .posts import router as posts_router
from .users import router as users_router

__all__ = ["login_router", "posts_router", "users_router"]
