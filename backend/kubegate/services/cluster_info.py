import asyncio
import logging

from kubernetes import client

from kubegate.models.kubernetes import ClusterInfo
from kubegate.services.errors import normalize_error

logger = logging.getLogger(__name__)

# CPU and memory usage are not wired to any metrics source yet
USAGE_NOT_IMPLEMENTED = 0.0


def _count_nodes(api_client: client.ApiClient) -> int:
    v1 = client.CoreV1Api(api_client)
    return len(v1.list_node().items)


async def get_cluster_info(api_client: client.ApiClient) -> ClusterInfo:
    """Reachability snapshot based on the node list"""
    try:
        node_count = await asyncio.to_thread(_count_nodes, api_client)
    except Exception as e:
        logger.warning(f"Failed to get cluster info: {e}")
        return ClusterInfo(
            status="Error",
            node_count=0,
            cpu_usage=0.0,
            mem_usage=0.0,
            error=normalize_error(e),
        )

    return ClusterInfo(
        status="Healthy",
        node_count=node_count,
        cpu_usage=USAGE_NOT_IMPLEMENTED,
        mem_usage=USAGE_NOT_IMPLEMENTED,
    )
