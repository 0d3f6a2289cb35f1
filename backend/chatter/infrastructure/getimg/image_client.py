"""
GetImg text-to-image client (flux-schnell).
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Optional

import httpx

from chatter.core.exceptions import ConfigurationError, UpstreamError
from chatter.core.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_STEPS = 4


class GetImgClient:
    """Thin wrapper over the GetImg REST API. Returns raw image bytes."""

    def __init__(self, api_key: str, api_url: str, timeout: float = 120.0):
        if not api_key:
            raise ConfigurationError("GETIMG_API_KEY not configured")
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout

    async def generate(
        self,
        prompt: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        steps: Optional[int] = None,
    ) -> bytes:
        """
        Generate an image.

        Raises:
            UpstreamError: On non-success response or undecodable payload
        """
        params: dict[str, Any] = {
            "prompt": prompt,
            "steps": steps or DEFAULT_STEPS,
            "response_format": "b64",
        }
        if width:
            params["width"] = width
        if height:
            params["height"] = height

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._api_url, json=params, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamError(f"GetImg request failed: {e}") from e

        if resp.status_code >= 400:
            logger.error(f"GetImg API error: {resp.status_code} {resp.text}")
            raise UpstreamError(resp.text, status_code=resp.status_code)

        try:
            return base64.b64decode(resp.json()["image"])
        except (KeyError, TypeError, ValueError, binascii.Error) as e:
            raise UpstreamError(f"GetImg returned an unreadable image: {e}") from e
