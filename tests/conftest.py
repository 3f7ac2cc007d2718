"""
Shared fixtures and builders for the test suite.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from kubernetes import client

from kubegate.models.kubernetes import ClusterContext


NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Kubernetes object builders
# ---------------------------------------------------------------------------

def make_meta(name: str, namespace: str | None = "default", uid: str | None = None,
              created: datetime | None = None) -> client.V1ObjectMeta:
    return client.V1ObjectMeta(
        name=name,
        namespace=namespace,
        uid=uid or f"uid-{name}",
        creation_timestamp=created,
    )


def make_pod(name: str, namespace: str = "default", images: list[str | None] | None = None,
             phase: str | None = "Running", started_hours_ago: float | None = None) -> client.V1Pod:
    containers = [
        client.V1Container(name=f"c{i}", image=image)
        for i, image in enumerate(images if images is not None else ["nginx:1.25"])
    ]
    start_time = None
    if started_hours_ago is not None:
        start_time = datetime.now(timezone.utc) - timedelta(hours=started_hours_ago)
    return client.V1Pod(
        metadata=make_meta(name, namespace),
        spec=client.V1PodSpec(containers=containers),
        status=client.V1PodStatus(phase=phase, start_time=start_time),
    )


def exec_status(returncode: int) -> str:
    """Status document the API server sends on the exec error channel"""
    if returncode == 0:
        return json.dumps({"metadata": {}, "status": "Success"})
    return json.dumps({
        "metadata": {},
        "status": "Failure",
        "message": f"command terminated with non-zero exit code: exit status {returncode}",
        "reason": "NonZeroExitCode",
        "details": {"causes": [{"reason": "ExitCode", "message": str(returncode)}]},
    })


class FakeExecStream:
    """Stands in for the WSClient returned by kubernetes.stream.stream"""

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0, frames: int = 0,
                 status: str | None = None):
        self._stdout = stdout
        self._stderr = stderr
        self._frames = frames
        self._status = exec_status(returncode) if status is None else status
        self.closed = False

    def is_open(self) -> bool:
        return self._frames > 0

    def update(self, timeout=None) -> None:
        self._frames -= 1

    def peek_stdout(self) -> bool:
        return bool(self._stdout)

    def peek_stderr(self) -> bool:
        return bool(self._stderr)

    def read_stdout(self) -> str:
        out, self._stdout = self._stdout, ""
        return out

    def read_stderr(self) -> str:
        err, self._stderr = self._stderr, ""
        return err

    def read_channel(self, channel: int, timeout=0) -> str:
        assert channel == 3, f"unexpected channel {channel}"
        status, self._status = self._status, ""
        return status

    def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Sample kubeconfig documents
# ---------------------------------------------------------------------------

KUBECONFIG_YAML = """\
apiVersion: v1
kind: Config
current-context: ctx-a
clusters:
  - name: cluster-a
    cluster:
      server: https://127.0.0.1:6443
  - name: cluster-b
    cluster:
      server: https://eks-prod.us-east-1.eks.amazonaws.com
contexts:
  - name: ctx-a
    context:
      cluster: cluster-a
      user: user-a
  - name: ctx-b
    context:
      cluster: cluster-b
      user: user-b
      namespace: payments
users:
  - name: user-a
    user:
      token: token-a
  - name: user-b
    user:
      token: token-b
"""


@pytest.fixture
def cluster_context() -> ClusterContext:
    return ClusterContext(
        id="cluster-1",
        name="dev",
        provider="local",
        region="local",
        environment="dev",
        status="Healthy",
        cpu_usage=0.0,
        mem_usage=0.0,
        node_count=1,
        kubeconfig=KUBECONFIG_YAML,
    )


@pytest.fixture
def api_client() -> client.ApiClient:
    configuration = client.Configuration()
    configuration.host = "https://127.0.0.1:6443"
    api = client.ApiClient(configuration=configuration)
    yield api
    api.close()
