from .analysis import router as analysis_router
from .db import router as db_router

__all__ = ["analysis_router", "db_router"]
