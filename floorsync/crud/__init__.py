from . import store
from .order import (
    create_order,
    get_order,
    list_orders,
)

__all__ = [
    "store",
    # Order functions
    "create_order",
    "get_order",
    "list_orders",
]
