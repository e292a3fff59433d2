# order_tracker/services/__init__.py
from .order_service import OrderService
from .user_service import UserService

__all__ = ["OrderService", "UserService"]
