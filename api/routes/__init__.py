"""API routes package"""

from . import health, menus, preferences, recipes

__all__ = ["health", "menus", "preferences", "recipes"]
