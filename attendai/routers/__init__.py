from fastapi import APIRouter
from .attendance import router as attendance_router
from .auth import router as auth_router
from .data import router as data_router
from .schedule import router as schedule_router

router = APIRouter()

router.include_router(auth_router)
router.include_router(data_router)
router.include_router(schedule_router)
router.include_router(attendance_router)
