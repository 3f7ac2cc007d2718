from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for payloads exchanged with the UI (camelCase on the wire)"""
    model_config = ConfigDict(populate_by_name=True)


class ClusterContext(WireModel):
    """Saved cluster entry as sent by the UI"""
    id: str
    name: str
    provider: str
    region: str
    environment: str
    status: str
    cpu_usage: float = Field(alias="cpuUsage")
    mem_usage: float = Field(alias="memUsage")
    node_count: int = Field(alias="nodeCount")
    kubeconfig: Optional[str] = None


class ClusterInfo(WireModel):
    """Point-in-time cluster snapshot"""
    status: str
    node_count: int = Field(alias="nodeCount")
    cpu_usage: float = Field(alias="cpuUsage")
    mem_usage: float = Field(alias="memUsage")
    error: Optional[str] = None


class Resource(WireModel):
    """Metadata projection of any control-plane object"""
    id: str
    name: str
    namespace: str
    creation_timestamp: str = Field(alias="creationTimestamp")


class ResourcesResponse(WireModel):
    """Resource listing result"""
    items: List[Resource] = []
    error: Optional[str] = None


class Workload(WireModel):
    """Pod-level workload row"""
    id: str
    name: str
    namespace: str
    image: str
    context_id: str = Field(alias="contextId")
    status: str
    replicas: int
    uptime: str


class WorkloadsResponse(WireModel):
    """Workload listing result"""
    items: List[Workload] = []
    error: Optional[str] = None


class ProviderType(str, Enum):
    """Infrastructure provider guessed from kubeconfig naming"""
    LOCAL = "local"
    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"


class DiscoveredCluster(WireModel):
    """Context found in the local kubeconfig"""
    context_name: str = Field(alias="contextName")
    cluster_name: str = Field(alias="clusterName")
    server: str
    namespace: str
    is_current_context: bool = Field(alias="isCurrentContext")
    provider: ProviderType


class ExecRequest(WireModel):
    """Command to run inside a pod"""
    namespace: str
    pod_name: str = Field(alias="podName")
    container: Optional[str] = None
    command: List[str]


class ExecResponse(WireModel):
    """Captured command output"""
    output: str = ""
    error: Optional[str] = None


class ResourcesRequest(WireModel):
    """Body for a resource listing call"""
    config: ClusterContext
    resource_type: str = Field(alias="resourceType")


class ExecPodRequest(WireModel):
    """Body for an exec call"""
    config: ClusterContext
    request: ExecRequest


class PodContainersRequest(WireModel):
    """Body for a container listing call"""
    config: ClusterContext
    namespace: str
    pod_name: str = Field(alias="podName")

