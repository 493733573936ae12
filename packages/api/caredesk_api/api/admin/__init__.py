"""
Admin API routers, mounted under /api/admin.
"""

from fastapi import APIRouter

from caredesk_api.api.admin import audit, bookings, jobs, payments, users

router = APIRouter()
router.include_router(jobs.router)
router.include_router(bookings.router)
router.include_router(users.router)
router.include_router(payments.router)
router.include_router(audit.router)

__all__ = ["router"]
