from fastapi import APIRouter, HTTPException
from kubegate.services.errors import ConfigError
from kubegate.services.kubernetes_service import KubernetesService
from kubegate.models.kubernetes import (
    ClusterContext, ResourcesRequest, ResourcesResponse, WorkloadsResponse
)

router = APIRouter()
kubernetes_service = KubernetesService()


@router.post("/clusters/workloads", response_model=WorkloadsResponse, response_model_exclude_none=True)
async def get_workloads(cluster: ClusterContext):
    """Get all pods of a cluster as workloads"""
    try:
        return await kubernetes_service.get_workloads(cluster)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=f"Failed to create client: {e}")


@router.post("/clusters/resources", response_model=ResourcesResponse, response_model_exclude_none=True)
async def get_resources(body: ResourcesRequest):
    """Get all objects of one resource type (Services, ConfigMaps, ...)"""
    try:
        return await kubernetes_service.get_resources(body.config, body.resource_type)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=f"Failed to create client: {e}")
