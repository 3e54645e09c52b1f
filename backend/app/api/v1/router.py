"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import hikes, events

api_router = APIRouter()

api_router.include_router(hikes.router, prefix="/hikes", tags=["Hikes"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
