# routers/__init__.py
from .units import router as units_router
from .rentals import router as rentals_router
from .treasury import router as treasury_router

__all__ = [
     "units_router",
     "rentals_router",
     "treasury_router",
]
