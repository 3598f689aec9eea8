from .order_store import OrderStore, order_from_receipt

__all__ = ["OrderStore", "order_from_receipt"]
