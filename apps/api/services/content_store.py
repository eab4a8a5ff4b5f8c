"""
Content store (Sanity) query client.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from config import StoreIdentity, require_store_identity, settings
from services.errors import ConfigError, HTTPError, TransportError

logger = logging.getLogger(__name__)


def build_endpoint(identity: StoreIdentity, api_host: Optional[str] = None) -> str:
    host = api_host or settings.SANITY_API_HOST
    return "https://{project}.api.{host}/v{version}/data/query/{dataset}".format(
        project=quote(identity.project_id, safe=""),
        host=host,
        version=quote(identity.api_version, safe=""),
        dataset=quote(identity.dataset, safe=""),
    )


class ContentStoreClient:
    """Single-attempt client for parametrized store queries."""

    def __init__(
        self,
        identity: Optional[StoreIdentity] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        self._identity = identity
        self._timeout = timeout if timeout is not None else settings.SANITY_TIMEOUT_SECONDS
        self._http = http_client

    @property
    def identity(self) -> StoreIdentity:
        """Store identity, falling back to the configured one; raises ConfigError when incomplete."""
        if self._identity is None:
            return require_store_identity()
        if not self._identity.is_complete:
            raise ConfigError("Content store settings missing. Configure SANITY_PROJECT_ID and SANITY_DATASET.")
        return self._identity

    def _headers(self, identity: StoreIdentity) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json; charset=utf-8",
        }
        if identity.token:
            headers["Authorization"] = f"Bearer {identity.token}"
        return headers

    def query(self, groq: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run a query and return the response's ``result`` field.

        Raises:
            ConfigError: store identity is not configured
            TransportError: network failure, timeout or unreadable body
            HTTPError: non-2xx response from the store
        """
        identity = self.identity
        endpoint = build_endpoint(identity)
        payload = {"query": groq, "params": params or {}}

        try:
            if self._http is not None:
                response = self._http.post(
                    endpoint, json=payload, headers=self._headers(identity), timeout=self._timeout
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.post(endpoint, json=payload, headers=self._headers(identity))
        except httpx.HTTPError as exc:
            logger.warning("Content store transport error: %s", exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError):
            body = None

        if response.status_code < 200 or response.status_code >= 300:
            detail = body if body is not None else response.text
            logger.warning(
                "Content store HTTP %s query=%s params=%s detail=%s",
                response.status_code,
                groq[:200],
                params,
                detail,
            )
            raise HTTPError(response.status_code, detail)

        if not isinstance(body, dict):
            raise TransportError("Content store returned an unreadable response body.")
        return body.get("result")
