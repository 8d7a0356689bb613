"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from messenger.api.routes import users, messages

api_router = APIRouter()

# Include all route modules
api_router.include_router(users.router)
api_router.include_router(messages.router)
