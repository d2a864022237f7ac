from fastapi import APIRouter

from .user import router as user_router
from .purchase import router as purchase_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(user_router)
v1_router.include_router(purchase_router)
