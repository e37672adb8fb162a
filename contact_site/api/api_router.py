from fastapi import APIRouter
from contact_site.api.endpoints import contact, health, static

api_router = APIRouter()

api_router.include_router(contact.router, tags=["Contact"])
api_router.include_router(health.router, tags=["Health"])
# Catch-all, must stay last
api_router.include_router(static.router)
