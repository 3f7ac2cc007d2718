"""
Resource type registry.

Each supported resource tag is bound to the API group class and the
cluster-wide list call that returns it. Every returned object is projected
through the same metadata projection, so adding a kind only needs a new
ResourceKind member and a RESOURCE_LISTERS entry.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

from kubernetes import client

from kubegate.models.kubernetes import Resource, ResourcesResponse
from kubegate.services.errors import normalize_error

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    """Resource tags the UI may ask for (matched case-sensitively)"""
    PODS = "Pods"
    NODES = "Nodes"
    SERVICES = "Services"
    CONFIG_MAPS = "ConfigMaps"
    NAMESPACES = "Namespaces"
    DEPLOYMENTS = "Deployments"
    STATEFUL_SETS = "StatefulSets"
    DAEMON_SETS = "DaemonSets"
    INGRESSES = "Ingresses"
    SECRETS = "Secrets"
    PVCS = "PVCs"
    SERVICE_ACCOUNTS = "ServiceAccounts"


@dataclass(frozen=True)
class ResourceLister:
    """A list call on one API group, e.g. CoreV1Api.list_node"""
    api: Callable[[client.ApiClient], Any]
    method: str

    def list(self, api_client: client.ApiClient) -> List[Any]:
        api = self.api(api_client)
        return getattr(api, self.method)().items


RESOURCE_LISTERS: Dict[ResourceKind, ResourceLister] = {
    ResourceKind.PODS: ResourceLister(client.CoreV1Api, "list_pod_for_all_namespaces"),
    ResourceKind.NODES: ResourceLister(client.CoreV1Api, "list_node"),
    ResourceKind.SERVICES: ResourceLister(client.CoreV1Api, "list_service_for_all_namespaces"),
    ResourceKind.CONFIG_MAPS: ResourceLister(client.CoreV1Api, "list_config_map_for_all_namespaces"),
    ResourceKind.NAMESPACES: ResourceLister(client.CoreV1Api, "list_namespace"),
    ResourceKind.DEPLOYMENTS: ResourceLister(client.AppsV1Api, "list_deployment_for_all_namespaces"),
    ResourceKind.STATEFUL_SETS: ResourceLister(client.AppsV1Api, "list_stateful_set_for_all_namespaces"),
    ResourceKind.DAEMON_SETS: ResourceLister(client.AppsV1Api, "list_daemon_set_for_all_namespaces"),
    ResourceKind.INGRESSES: ResourceLister(client.NetworkingV1Api, "list_ingress_for_all_namespaces"),
    ResourceKind.SECRETS: ResourceLister(client.CoreV1Api, "list_secret_for_all_namespaces"),
    ResourceKind.PVCS: ResourceLister(
        client.CoreV1Api, "list_persistent_volume_claim_for_all_namespaces"
    ),
    ResourceKind.SERVICE_ACCOUNTS: ResourceLister(
        client.CoreV1Api, "list_service_account_for_all_namespaces"
    ),
}


def project_resource(obj: Any) -> Resource:
    """Project an object's metadata onto the generic Resource shape"""
    meta = obj.metadata
    created = meta.creation_timestamp
    return Resource(
        id=meta.uid or "",
        name=meta.name or "",
        namespace=meta.namespace or "default",
        creation_timestamp=created.isoformat() if created else "",
    )


def _fetch(api_client: client.ApiClient, kind: ResourceKind) -> List[Resource]:
    return [project_resource(item) for item in RESOURCE_LISTERS[kind].list(api_client)]


async def list_resources(api_client: client.ApiClient, resource_type: str) -> ResourcesResponse:
    """List every object of the given kind across the cluster"""
    try:
        kind = ResourceKind(resource_type)
    except ValueError:
        return ResourcesResponse(items=[], error=f"Unsupported resource type: {resource_type}")

    try:
        items = await asyncio.to_thread(_fetch, api_client, kind)
    except Exception as e:
        error = normalize_error(e)
        logger.warning(f"Failed to list {kind.value}: {error}")
        return ResourcesResponse(items=[], error=error)

    return ResourcesResponse(items=items)
