import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Callable, List, Optional

from kubernetes import client

from kubegate.models.kubernetes import (
    ClusterContext, ClusterInfo, DiscoveredCluster, ExecRequest, ExecResponse,
    ResourcesResponse, WorkloadsResponse
)
from kubegate.services import client_factory, cluster_info, discovery, executor, resources, workloads

logger = logging.getLogger(__name__)


class KubernetesService:
    """Service for Kubernetes operations

    Every call builds a fresh API client from the cluster entry's inline
    kubeconfig (or the ambient configuration when it has none) and closes it
    when the call returns.
    """

    def __init__(self, resolve_kubeconfig_path: Optional[Callable[[], Optional[Path]]] = None):
        self.resolve_kubeconfig_path = resolve_kubeconfig_path or discovery.KubeconfigPathResolver()

    @asynccontextmanager
    async def _client(self, cluster: ClusterContext) -> AsyncIterator[client.ApiClient]:
        """API client for a cluster entry; raises ConfigError if one can't be built"""
        if cluster.kubeconfig:
            api_client = await client_factory.from_credential(cluster.kubeconfig)
        else:
            api_client = await client_factory.from_environment()
        try:
            yield api_client
        finally:
            api_client.close()

    async def get_cluster_info(self, cluster: ClusterContext) -> ClusterInfo:
        """Get node count and reachability for a cluster"""
        async with self._client(cluster) as api_client:
            return await cluster_info.get_cluster_info(api_client)

    async def get_workloads(self, cluster: ClusterContext) -> WorkloadsResponse:
        """Get all pods of a cluster as workload rows"""
        async with self._client(cluster) as api_client:
            return await workloads.list_workloads(api_client, cluster.id)

    async def get_resources(self, cluster: ClusterContext, resource_type: str) -> ResourcesResponse:
        """Get all objects of one resource type"""
        async with self._client(cluster) as api_client:
            return await resources.list_resources(api_client, resource_type)

    async def discover_clusters(self) -> List[DiscoveredCluster]:
        """Get the contexts of the local kubeconfig"""
        return await asyncio.to_thread(discovery.discover_clusters, self.resolve_kubeconfig_path)

    async def exec_pod_command(self, cluster: ClusterContext, request: ExecRequest) -> ExecResponse:
        """Run a command in a pod and capture its output"""
        async with self._client(cluster) as api_client:
            return await executor.execute(
                api_client,
                request.namespace,
                request.pod_name,
                request.container,
                request.command,
            )

    async def get_pod_containers(self, cluster: ClusterContext, namespace: str, pod_name: str) -> List[str]:
        """Get container names of a pod"""
        async with self._client(cluster) as api_client:
            return await executor.list_containers(api_client, namespace, pod_name)
