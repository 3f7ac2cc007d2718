import asyncio
import logging
from typing import Any, Dict, Optional

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from kubegate.services.errors import ConfigError

logger = logging.getLogger(__name__)


def _primary_context(document: Dict[str, Any]) -> str:
    """Pick the declared current-context, or the first context in the document"""
    contexts = document.get("contexts") or []
    names = [c.get("name") for c in contexts if isinstance(c, dict) and c.get("name")]
    if not names:
        raise ConfigError("kubeconfig declares no contexts")

    current = document.get("current-context")
    if current in names:
        return current
    return names[0]


def _client_from_credential(blob: str) -> client.ApiClient:
    try:
        document = yaml.safe_load(blob)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid kubeconfig: {e}") from e

    if not isinstance(document, dict):
        raise ConfigError("Invalid kubeconfig: expected a mapping at the top level")

    context = _primary_context(document)
    try:
        api_client = config.new_client_from_config_dict(
            config_dict=document, context=context, persist_config=False
        )
    except (ConfigException, ValueError, KeyError, TypeError) as e:
        raise ConfigError(str(e)) from e

    logger.debug(f"Built client from inline kubeconfig (context={context})")
    return api_client


def _client_from_environment(config_file: Optional[str] = None) -> client.ApiClient:
    configuration = client.Configuration()
    try:
        # Local kubeconfig first, then the in-cluster service account
        config.load_kube_config(config_file=config_file, client_configuration=configuration)
        logger.debug("Built client from local kubeconfig")
    except (ConfigException, ValueError, KeyError, TypeError) as kube_error:
        try:
            config.load_incluster_config(client_configuration=configuration)
            logger.debug("Built client from in-cluster configuration")
        except ConfigException as e:
            raise ConfigError(
                f"No usable Kubernetes configuration found: kubeconfig: {kube_error}; in-cluster: {e}"
            ) from e

    return client.ApiClient(configuration=configuration)


async def from_credential(blob: str) -> client.ApiClient:
    """Build an API client bound to the primary context of an inline kubeconfig.

    Nothing is sent to the server here; connection problems show up on first use.
    """
    return await asyncio.to_thread(_client_from_credential, blob)


async def from_environment(config_file: Optional[str] = None) -> client.ApiClient:
    """Build an API client from the ambient kubeconfig, or in-cluster settings without one"""
    return await asyncio.to_thread(_client_from_environment, config_file)
