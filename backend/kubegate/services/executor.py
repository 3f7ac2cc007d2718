import asyncio
import logging
from typing import Any, Dict, List, Optional

import yaml
from kubernetes import client
from kubernetes.stream import stream
from kubernetes.stream.ws_client import ERROR_CHANNEL

from kubegate.models.kubernetes import ExecResponse
from kubegate.services.errors import CommandFailedError, ExecFailedError

logger = logging.getLogger(__name__)

STDERR_SEPARATOR = "\n[stderr]:\n"


def combine_output(stdout: str, stderr: str) -> str:
    """Stdout followed by stderr, if any, under a marker line"""
    if not stderr:
        return stdout
    return f"{stdout}{STDERR_SEPARATOR}{stderr}"


def exit_code(status_text: str) -> int:
    """Exit code from the exec status channel.

    The channel carries a metav1.Status document. Success (or no document at
    all) is 0, a NonZeroExitCode failure yields its ExitCode cause, and any
    other failure raises ExecFailedError with the server's message.
    """
    try:
        status = yaml.safe_load(status_text or "{}")
    except yaml.YAMLError as e:
        raise ExecFailedError(status_text.strip()) from e
    if not isinstance(status, dict):
        raise ExecFailedError(str(status_text).strip())

    if status.get("status", "Success") == "Success":
        return 0

    message = status.get("message") or status.get("reason") or "exec failed"
    if status.get("reason") == "NonZeroExitCode":
        details: Dict[str, Any] = status.get("details") or {}
        for cause in details.get("causes") or []:
            if isinstance(cause, dict) and cause.get("reason") == "ExitCode":
                try:
                    return int(cause.get("message"))
                except (TypeError, ValueError):
                    break
    raise ExecFailedError(message)


def exec_in_pod(
    api_client: client.ApiClient,
    namespace: str,
    pod_name: str,
    container: Optional[str],
    command: List[str],
) -> str:
    """Run a command in a pod and return its combined output.

    Raises whatever the attach fails with, or CommandFailedError when the
    command exits non-zero.
    """
    v1 = client.CoreV1Api(api_client)

    kwargs = dict(stderr=True, stdin=False, stdout=True, tty=False, _preload_content=False)
    if container:
        kwargs["container"] = container

    resp = stream(
        v1.connect_get_namespaced_pod_exec,
        pod_name,
        namespace,
        command=command,
        **kwargs,
    )

    stdout: List[str] = []
    stderr: List[str] = []
    try:
        while resp.is_open():
            resp.update(timeout=1)
            if resp.peek_stdout():
                stdout.append(resp.read_stdout())
            if resp.peek_stderr():
                stderr.append(resp.read_stderr())

        # Whatever arrived with the final frame
        stdout.append(resp.read_stdout())
        stderr.append(resp.read_stderr())
        status = resp.read_channel(ERROR_CHANNEL)
    finally:
        resp.close()

    out = "".join(stdout)
    err = "".join(stderr)
    returncode = exit_code(status)
    if returncode:
        raise CommandFailedError(returncode, err)
    return combine_output(out, err)


async def execute(
    api_client: client.ApiClient,
    namespace: str,
    pod_name: str,
    container: Optional[str],
    command: List[str],
) -> ExecResponse:
    """Run a command in a pod; failures come back in the response's error field"""
    logger.info(f"Exec request: namespace={namespace}, pod={pod_name}, container={container}")
    try:
        output = await asyncio.to_thread(
            exec_in_pod, api_client, namespace, pod_name, container, command
        )
    except Exception as e:
        logger.warning(f"Exec in {namespace}/{pod_name} failed: {e}")
        return ExecResponse(output="", error=str(e))

    return ExecResponse(output=output)


def _container_names(api_client: client.ApiClient, namespace: str, pod_name: str) -> List[str]:
    v1 = client.CoreV1Api(api_client)
    pod = v1.read_namespaced_pod(pod_name, namespace)
    if not pod.spec or not pod.spec.containers:
        return []
    return [c.name for c in pod.spec.containers]


async def list_containers(api_client: client.ApiClient, namespace: str, pod_name: str) -> List[str]:
    """Container names of a pod in declared order; fetch failures are raised"""
    return await asyncio.to_thread(_container_names, api_client, namespace, pod_name)
