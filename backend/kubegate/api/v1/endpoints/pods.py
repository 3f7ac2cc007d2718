from fastapi import APIRouter, HTTPException
from typing import List
from kubegate.services.errors import ConfigError
from kubegate.services.kubernetes_service import KubernetesService
from kubegate.models.kubernetes import ExecPodRequest, ExecResponse, PodContainersRequest

router = APIRouter()
kubernetes_service = KubernetesService()


@router.post("/pods/exec", response_model=ExecResponse, response_model_exclude_none=True)
async def exec_pod_command(body: ExecPodRequest):
    """Run a command in a pod and return its output"""
    try:
        return await kubernetes_service.exec_pod_command(body.config, body.request)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=f"Failed to create client: {e}")


@router.post("/pods/containers", response_model=List[str])
async def get_pod_containers(body: PodContainersRequest):
    """Get container names of a pod"""
    try:
        return await kubernetes_service.get_pod_containers(body.config, body.namespace, body.pod_name)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=f"Failed to create client: {e}")
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
