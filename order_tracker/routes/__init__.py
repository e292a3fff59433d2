# order_tracker/routes/__init__.py
