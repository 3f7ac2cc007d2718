"""
Cluster discovery from the local kubeconfig.

Discovery never fails from the caller's point of view: a missing home
directory, a missing file or an unreadable document all log a warning and
yield an empty list.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import yaml

from kubegate.models.kubernetes import DiscoveredCluster, ProviderType

logger = logging.getLogger(__name__)

# Checked in order, first match wins; local indicators come before cloud ones
PROVIDER_MARKERS: Tuple[Tuple[ProviderType, Tuple[str, ...]], ...] = (
    (ProviderType.LOCAL, ("docker-desktop", "docker.internal", "minikube", "kind", "k3", "microk8s")),
    (ProviderType.AWS, ("eks", "amazonaws")),
    (ProviderType.AZURE, ("aks", "azure")),
    (ProviderType.GCP, ("gke", "googleapis")),
)


@dataclass(frozen=True)
class KubeconfigPathResolver:
    """Resolve the kubeconfig location from an environment mapping"""
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    override_var: str = "KUBECONFIG"
    home_vars: Tuple[str, ...] = ("HOME", "USERPROFILE")
    relative_path: Tuple[str, ...] = (".kube", "config")

    def __call__(self) -> Optional[Path]:
        override = self.environ.get(self.override_var)
        if override is not None:
            return Path(override)

        for var in self.home_vars:
            home = self.environ.get(var)
            if home is not None:
                return Path(home).joinpath(*self.relative_path)

        return None


def classify_provider(context_name: str, cluster_name: str, server: str) -> ProviderType:
    """Guess the infrastructure provider from naming conventions"""
    combined = f"{context_name} {cluster_name} {server}".lower()
    for provider, markers in PROVIDER_MARKERS:
        if any(marker in combined for marker in markers):
            return provider
    return ProviderType.LOCAL


def _named(entries: Any) -> List[Dict[str, Any]]:
    if not isinstance(entries, list):
        return []
    return [e for e in entries if isinstance(e, dict) and isinstance(e.get("name"), str) and e["name"]]


def parse_kubeconfig(document: Dict[str, Any]) -> List[DiscoveredCluster]:
    """Turn every resolvable context of a kubeconfig document into a DiscoveredCluster"""
    current_context = document.get("current-context")
    clusters = {c["name"]: c.get("cluster") for c in _named(document.get("clusters"))}

    discovered = []
    for named_context in _named(document.get("contexts")):
        context_name = named_context["name"]
        context = named_context.get("context")
        if not isinstance(context, dict):
            continue

        cluster_name = context.get("cluster")
        cluster = clusters.get(cluster_name) if isinstance(cluster_name, str) else None
        server = cluster.get("server") if isinstance(cluster, dict) else None
        if not isinstance(server, str) or not server:
            # Nothing to connect to, skip it
            continue

        namespace = context.get("namespace")
        if not isinstance(namespace, str) or not namespace:
            namespace = "default"

        discovered.append(DiscoveredCluster(
            context_name=context_name,
            cluster_name=cluster_name,
            server=server,
            namespace=namespace,
            is_current_context=current_context is not None and context_name == current_context,
            provider=classify_provider(context_name, cluster_name, server),
        ))

    return discovered


def load_kubeconfig(path: Path) -> Optional[Dict[str, Any]]:
    """Read and parse a kubeconfig file, or None if it can't be used"""
    if not path.exists():
        logger.warning(f"Kubeconfig not found at {path}")
        return None

    try:
        with open(path, "r") as file:
            document = yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load kubeconfig {path}: {e}")
        return None

    if not isinstance(document, dict):
        logger.warning(f"Failed to load kubeconfig {path}: not a mapping")
        return None
    return document


def discover_clusters(resolve_path: Callable[[], Optional[Path]]) -> List[DiscoveredCluster]:
    """List the contexts of the local kubeconfig"""
    path = resolve_path()
    if path is None:
        logger.warning("Could not resolve a home directory for the kubeconfig")
        return []

    document = load_kubeconfig(path)
    if document is None:
        return []
    return parse_kubeconfig(document)
