from fastapi import APIRouter

from invites_api.api.routes import invites

api_router = APIRouter()
api_router.include_router(invites.router, tags=["invites"])
