"""Builds Azure OpenAI clients from configured endpoints."""

import logging
from typing import Optional

from openai import AzureOpenAI

logger = logging.getLogger(__name__)

DEPLOYMENTS_MARKER = "/openai/deployments"

def normalize_endpoint(endpoint: str) -> str:
    """
    Reduces a configured endpoint to the resource base URL.

    Accepts either the bare resource URL or a full deployment URL copied
    from the portal, e.g.
    ``https://x.openai.azure.com/openai/deployments/whisper/audio/...``.
    """
    endpoint = endpoint.strip()
    marker_at = endpoint.find(DEPLOYMENTS_MARKER)
    if marker_at != -1:
        return endpoint[:marker_at]
    return endpoint.rstrip("/")

def create_client(
    endpoint: str,
    api_key: str,
    api_version: str,
    timeout_seconds: Optional[float] = None,
) -> AzureOpenAI:
    """Creates a client that never retries on its own."""
    base_endpoint = normalize_endpoint(endpoint)
    logger.debug(f"Creating Azure OpenAI client for {base_endpoint} (api-version {api_version})")
    client_kwargs = {}
    if timeout_seconds is not None:
        client_kwargs["timeout"] = timeout_seconds
    return AzureOpenAI(
        azure_endpoint=base_endpoint,
        api_key=api_key,
        api_version=api_version,
        max_retries=0,
        **client_kwargs,
    )
