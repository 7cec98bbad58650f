"""API version 1 routes."""

from fastapi import APIRouter

from app.api.v1 import categorization

router = APIRouter(prefix="/api/v1")

router.include_router(categorization.router)
