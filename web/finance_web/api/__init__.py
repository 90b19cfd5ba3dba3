from fastapi import APIRouter

from .pages import router as pages_router
from .transactions import router as transactions_router
from .categories import router as categories_router
from .analytics import router as analytics_router
from .budgets import router as budgets_router
from .user import router as user_router

api_router = APIRouter()

api_router.include_router(transactions_router, prefix="/transactions", tags=["transactions"])
api_router.include_router(categories_router, prefix="/categories", tags=["categories"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
api_router.include_router(budgets_router, prefix="/budgets", tags=["budgets"])
api_router.include_router(user_router, tags=["user"])

__all__ = ["api_router", "pages_router"]
