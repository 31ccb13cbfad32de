from fastapi import APIRouter
from handling_portal.api.v1.routes.auth import router as auth_router
from handling_portal.api.v1.routes.public import router as public_router
from handling_portal.api.v1.routes.bookings import router as bookings_router
from handling_portal.api.v1.routes.dashboard import router as dashboard_router
from handling_portal.api.v1.routes.wallet import router as wallet_router
from handling_portal.api.v1.routes.admin import router as admin_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router)
api_router.include_router(public_router)
api_router.include_router(bookings_router)
api_router.include_router(dashboard_router)
api_router.include_router(wallet_router)
api_router.include_router(admin_router)
