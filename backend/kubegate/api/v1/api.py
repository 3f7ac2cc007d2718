from fastapi import APIRouter
from .endpoints import clusters, resources, pods

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(clusters.router, tags=["clusters"])
api_router.include_router(resources.router, tags=["resources"])
api_router.include_router(pods.router, tags=["pods"])
