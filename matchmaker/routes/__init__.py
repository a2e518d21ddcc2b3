from fastapi import APIRouter

from .user_route import user_router
from .swipe_route import swipe_router
from .match_route import match_router
from .message_route import message_router
from .daily_pick_route import daily_pick_router
from .admin_route import admin_router

api_v1_router = APIRouter(prefix="/api/v1")

api_v1_router.include_router(user_router)
api_v1_router.include_router(swipe_router)
api_v1_router.include_router(match_router)
api_v1_router.include_router(message_router)
api_v1_router.include_router(daily_pick_router)
api_v1_router.include_router(admin_router)
