"""
Unit tests for the pod workload lister.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from unittest.mock import patch

from kubernetes import client
from kubernetes.client.rest import ApiException

from kubegate.services.errors import CONNECTION_REFUSED_MESSAGE
from kubegate.services.workloads import format_uptime, list_workloads, project_workload
from tests.conftest import NOW, make_pod


# ---------------------------------------------------------------------------
# format_uptime
# ---------------------------------------------------------------------------

def test_uptime_without_start_time():
    assert format_uptime(None, NOW) == "0h"


def test_uptime_in_hours():
    assert format_uptime(NOW - timedelta(hours=5), NOW) == "5h"


def test_uptime_in_days():
    assert format_uptime(NOW - timedelta(hours=30), NOW) == "1d"
    assert format_uptime(NOW - timedelta(hours=49), NOW) == "2d"


def test_uptime_exactly_one_day_stays_in_hours():
    assert format_uptime(NOW - timedelta(hours=24), NOW) == "24h"


def test_uptime_truncates_partial_hours():
    assert format_uptime(NOW - timedelta(minutes=59), NOW) == "0h"


def test_uptime_accepts_naive_start_time():
    naive = datetime(2025, 3, 1, 2, 0)
    assert format_uptime(naive, NOW) == "10h"


# ---------------------------------------------------------------------------
# project_workload
# ---------------------------------------------------------------------------

def test_project_workload_fields():
    pod = make_pod("api-7f9c", "shop", images=["ghcr.io/acme/api:2.1", "envoy:1.29"])
    pod.status.start_time = NOW - timedelta(hours=3)

    workload = project_workload(pod, "cluster-1", NOW)

    assert workload.id == "uid-api-7f9c"
    assert workload.name == "api-7f9c"
    assert workload.namespace == "shop"
    assert workload.image == "ghcr.io/acme/api:2.1"
    assert workload.context_id == "cluster-1"
    assert workload.status == "Running"
    assert workload.replicas == 1
    assert workload.uptime == "3h"


def test_project_workload_without_image_or_phase():
    pod = make_pod("bare", images=[None], phase=None)

    workload = project_workload(pod, "cluster-1", NOW)

    assert workload.image == "unknown"
    assert workload.status == "Unknown"
    assert workload.uptime == "0h"


def test_project_workload_without_containers():
    pod = make_pod("empty", images=[])

    assert project_workload(pod, "cluster-1", NOW).image == "unknown"


def test_project_workload_without_status():
    pod = client.V1Pod(metadata=client.V1ObjectMeta(name="fresh", uid="u1"))

    workload = project_workload(pod, "cluster-1", NOW)

    assert workload.status == "Unknown"
    assert workload.namespace == "default"
    assert workload.uptime == "0h"


# ---------------------------------------------------------------------------
# list_workloads
# ---------------------------------------------------------------------------

async def test_list_workloads(api_client):
    pods = client.V1PodList(items=[
        make_pod("web-1", started_hours_ago=30),
        make_pod("web-2", started_hours_ago=5),
    ])
    with patch.object(client.CoreV1Api, "list_pod_for_all_namespaces", return_value=pods):
        response = await list_workloads(api_client, "ctx-42")

    assert response.error is None
    assert [w.name for w in response.items] == ["web-1", "web-2"]
    assert [w.uptime for w in response.items] == ["1d", "5h"]
    assert {w.context_id for w in response.items} == {"ctx-42"}


async def test_list_workloads_connection_refused(api_client):
    error = ConnectionRefusedError(111, "Connection refused")
    with patch.object(client.CoreV1Api, "list_pod_for_all_namespaces", side_effect=error):
        response = await list_workloads(api_client, "ctx-42")

    assert response.items == []
    assert response.error == CONNECTION_REFUSED_MESSAGE


async def test_list_workloads_other_errors_pass_through(api_client):
    error = ApiException(status=401, reason="Unauthorized")
    with patch.object(client.CoreV1Api, "list_pod_for_all_namespaces", side_effect=error):
        response = await list_workloads(api_client, "ctx-42")

    assert response.items == []
    assert response.error == str(error)
