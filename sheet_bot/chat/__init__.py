"""Chat navigation for the bot.

Screens are registered with the router on import of `screens`.
"""
from . import screens  # noqa: F401
from .navigator import Navigator
from .router import Router
from .state import NavigationContext

__all__ = ["Navigator", "Router", "NavigationContext"]
