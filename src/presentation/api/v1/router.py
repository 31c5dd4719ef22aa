from fastapi import APIRouter

from .gift_card import gift_card_router
from .health import health_router
from .user import user_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(user_router, tags=["Users"])
router.include_router(gift_card_router, tags=["Gift Cards"])
