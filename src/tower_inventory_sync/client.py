"""Minimal Ansible Tower / AWX REST API client."""

import json
import logging
from typing import Any

import requests
import urllib3

from .errors import ApiError, MalformedResponseError, TransportError
from .models import ApiResponse, TowerConfig

log = logging.getLogger(__name__)


class TowerClient:
    """Issue authenticated, single-shot requests against the Tower API."""

    def __init__(self, config: TowerConfig) -> None:
        self.config = config
        self.api_url = f"{config.url.rstrip('/')}/api/{config.api_version}"
        if not config.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def build_url(self, api_path: str) -> str:
        """Build the full request URL for an API path.

        Tower expects API paths to end with "/", but a trailing slash breaks
        search filters, so URLs carrying a query (containing "=") are left as-is.
        """
        url = f"{self.api_url}/{api_path}"
        if not url.endswith("/") and "=" not in url:
            url += "/"
        return url

    def request(self, method: str, api_path: str, payload: dict[str, Any] | None = None) -> ApiResponse:
        """Make a request to the Tower API and return the parsed response."""
        url = self.build_url(api_path)
        method = method.upper()
        kwargs: dict[str, Any] = {
            "auth": (self.config.username, self.config.password),
            "verify": self.config.verify_ssl,
            "timeout": self.config.timeout,
        }
        if payload is not None:
            kwargs["data"] = json.dumps(payload)
            kwargs["headers"] = {"Content-Type": "application/json"}
            log.debug("Tower request payload: %s", kwargs["data"])

        log.debug("Call Tower API %s <%s>", method, url)
        try:
            response = requests.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"Error making Tower request {method} {url}: {e}") from e

        body = response.text or ""
        if not 200 <= response.status_code < 300:
            raise ApiError(
                f"Error calling Ansible Tower REST API {method} {url}. "
                f"Response Code: <{response.status_code}> Response: <{body}>",
                status_code=response.status_code,
                body=body,
            )

        if not body.strip():
            return ApiResponse(status_code=response.status_code, body=body, data={})

        try:
            data = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(
                f"Tower returned invalid JSON for {method} {url} (status {response.status_code}): {e}"
            ) from e
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Tower returned a JSON {type(data).__name__} for {method} {url}, expected an object"
            )
        return ApiResponse(status_code=response.status_code, body=body, data=data)

    def get(self, api_path: str) -> dict[str, Any]:
        """GET an API path and return its JSON body."""
        return self.request("GET", api_path).data

    def post(self, api_path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a payload and return the JSON body."""
        return self.request("POST", api_path, payload).data

    def patch(self, api_path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """PATCH a payload and return the JSON body."""
        return self.request("PATCH", api_path, payload).data
