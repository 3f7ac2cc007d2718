import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from kubernetes import client

from kubegate.models.kubernetes import Workload, WorkloadsResponse
from kubegate.services.errors import normalize_error

logger = logging.getLogger(__name__)


def format_uptime(start_time: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Coarse uptime: whole hours, or whole days once past 24 hours"""
    if start_time is None:
        return "0h"

    now = now or datetime.now(timezone.utc)
    if start_time.tzinfo is None:
        start_time = start_time.replace(tzinfo=timezone.utc)

    hours = int((now - start_time).total_seconds() / 3600)
    if hours > 24:
        return f"{hours // 24}d"
    return f"{hours}h"


def project_workload(pod: Any, context_id: str, now: Optional[datetime] = None) -> Workload:
    """Build a Workload row from a V1Pod"""
    meta = pod.metadata
    spec = pod.spec
    status = pod.status

    image = None
    if spec and spec.containers:
        image = spec.containers[0].image

    return Workload(
        id=meta.uid or "",
        name=meta.name or "",
        namespace=meta.namespace or "default",
        image=image or "unknown",
        context_id=context_id,
        status=(status.phase if status else None) or "Unknown",
        # One row per pod; owning controller replica counts are not looked up
        replicas=1,
        uptime=format_uptime(status.start_time if status else None, now),
    )


def _fetch(api_client: client.ApiClient, context_id: str) -> List[Workload]:
    v1 = client.CoreV1Api(api_client)
    pods = v1.list_pod_for_all_namespaces(watch=False)
    now = datetime.now(timezone.utc)
    return [project_workload(pod, context_id, now) for pod in pods.items]


async def list_workloads(api_client: client.ApiClient, context_id: str) -> WorkloadsResponse:
    """List pods cluster-wide as workload rows tagged with the caller's context id"""
    try:
        items = await asyncio.to_thread(_fetch, api_client, context_id)
    except Exception as e:
        error = normalize_error(e)
        logger.warning(f"Failed to list workloads for {context_id}: {error}")
        return WorkloadsResponse(items=[], error=error)

    return WorkloadsResponse(items=items)
