from .orders import router as orders_router
from .work_orders import router as work_orders_router
from .downtime import router as downtime_router
from .dashboard import router as dashboard_router
from .events import router as events_router

__all__ = ["orders_router", "work_orders_router", "downtime_router", "dashboard_router", "events_router"]
