"""Gemini REST client: one generateContent call per invocation."""

import json
import logging
from typing import Any

import httpx

from neuralpay_gateway.core.config import GatewayConfig
from neuralpay_gateway.core.exceptions import (
    ConfigurationError,
    UpstreamError,
    UpstreamInvalidResponseError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull the provider's error message out of a non-2xx response."""
    try:
        body = response.json()
        return body["error"]["message"]
    except (json.JSONDecodeError, ValueError, KeyError, TypeError):
        return response.text[:500] or response.reason_phrase


async def generate_content(
    model: str,
    request_body: dict[str, Any],
    config: GatewayConfig,
) -> dict[str, Any]:
    """
    Send a generateContent request to the provider and return the decoded body.

    Args:
        model: Model name, e.g. "gemini-2.5-flash"
        request_body: The GenerateContentRequest dict (contents, generationConfig, ...)
        config: Gateway configuration for credentials, URL and timeout settings

    Returns:
        The decoded GenerateContentResponse dict

    Raises:
        ConfigurationError: If no API key is configured
        UpstreamUnreachableError: If connection to the provider fails
        UpstreamTimeoutError: If the provider request times out
        UpstreamError: If the provider answers with a non-2xx status
        UpstreamInvalidResponseError: If the provider body is not a JSON object
    """
    if not config.api_key:
        raise ConfigurationError("API_KEY is not configured for the AI provider")

    url = config.model_url(model)

    timeout = httpx.Timeout(
        config.timeout_s,
        connect=config.connect_timeout_s,
    )

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            logger.debug(f"Calling provider model {model}")
            response = await client.post(
                url,
                json=request_body,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": config.api_key,
                },
            )

    except httpx.TimeoutException as e:
        logger.error(f"Timeout calling provider {url}: {e}")
        raise UpstreamTimeoutError(
            "AI provider did not respond in time",
            upstream=config.base_url,
        ) from e

    except (httpx.ConnectError, httpx.NetworkError) as e:
        logger.error(f"Connection error to provider {url}: {e}")
        raise UpstreamUnreachableError(
            f"Connection to AI provider failed: {str(e)}",
            upstream=config.base_url,
        ) from e

    if response.status_code >= 400:
        message = _error_message(response)
        logger.error(f"Provider returned HTTP {response.status_code}: {message}")
        raise UpstreamError(
            f"AI provider returned HTTP {response.status_code}: {message}",
            upstream=config.base_url,
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError) as e:
        raise UpstreamInvalidResponseError(
            "AI provider returned invalid JSON",
            upstream=config.base_url,
            status_code=response.status_code,
        ) from e

    if not isinstance(body, dict):
        raise UpstreamInvalidResponseError(
            "AI provider returned an unexpected response structure",
            upstream=config.base_url,
            status_code=response.status_code,
        )
    return body
