from fastapi import APIRouter
from admin_gateway.api.v1 import admin_proxy, env_check, health

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(env_check.router, tags=["health"])

# Admin API proxy
router.include_router(admin_proxy.router, tags=["admin"])
