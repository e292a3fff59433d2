# order_tracker/__init__.py
"""Order tracking API: in-memory orders and users behind JWT auth."""

__version__ = "1.0.0"
