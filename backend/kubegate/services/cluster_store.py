import json
import logging
import os
from typing import List

from pydantic import TypeAdapter

from kubegate.models.kubernetes import ClusterContext

logger = logging.getLogger(__name__)

_clusters_adapter = TypeAdapter(List[ClusterContext])


class ClusterStore:
    """The user's saved cluster list, kept as a JSON array on disk"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> List[ClusterContext]:
        """Saved clusters, or an empty list if nothing was saved yet"""
        if not os.path.exists(self.path):
            return []

        with open(self.path, "r") as file:
            return _clusters_adapter.validate_python(json.load(file))

    def save(self, clusters: List[ClusterContext]) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        payload = [c.model_dump(by_alias=True) for c in clusters]
        with open(self.path, "w") as file:
            json.dump(payload, file, indent=2)
        logger.info(f"Saved {len(clusters)} clusters to {self.path}")
