from fastapi import APIRouter, HTTPException, Response
from typing import List
from kubegate.core.config import settings
from kubegate.services.cluster_store import ClusterStore
from kubegate.services.errors import ConfigError
from kubegate.services.kubernetes_service import KubernetesService
from kubegate.models.kubernetes import ClusterContext, ClusterInfo, DiscoveredCluster

router = APIRouter()
kubernetes_service = KubernetesService()
cluster_store = ClusterStore(settings.clusters_path)


@router.get("/clusters", response_model=List[ClusterContext])
async def load_clusters():
    """Get the saved cluster list"""
    try:
        return cluster_store.load()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/clusters", status_code=204)
async def save_clusters(clusters: List[ClusterContext]):
    """Replace the saved cluster list"""
    try:
        cluster_store.save(clusters)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=204)


@router.get("/clusters/discover", response_model=List[DiscoveredCluster])
async def discover_clusters():
    """Get clusters from the local kubeconfig"""
    return await kubernetes_service.discover_clusters()


@router.post("/clusters/info", response_model=ClusterInfo, response_model_exclude_none=True)
async def get_cluster_info(cluster: ClusterContext):
    """Get node count and reachability of a cluster"""
    try:
        return await kubernetes_service.get_cluster_info(cluster)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=f"Failed to create client: {e}")
