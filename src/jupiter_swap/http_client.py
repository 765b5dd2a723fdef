import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from .models import JupiterAPIError

logger = logging.getLogger(__name__)


class HttpClient:
    """JSON over HTTP with a fixed per-call timeout and no retries."""

    def __init__(self, base_url: str, timeout: float, user_agent: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        adapter = HTTPAdapter(max_retries=0, pool_connections=4, pool_maxsize=16)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({"User-Agent": user_agent, "Content-Type": "application/json"})

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.debug("GET %s params=%s", path, params)
        return self._request("GET", path, params=params)

    def post_json(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("POST %s", path)
        return self._request("POST", path, json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        endpoint = f"{method} /{path.lstrip('/')}"
        try:
            response = self.session.request(method, self.url(path), timeout=self.timeout, **kwargs)
        except requests.Timeout as exc:
            raise JupiterAPIError(f"timed out after {self.timeout}s", endpoint=endpoint, cause=exc) from exc
        except requests.RequestException as exc:
            raise JupiterAPIError("request failed", endpoint=endpoint, cause=exc) from exc

        status = response.status_code
        if not 200 <= status < 300:
            raise JupiterAPIError(
                "returned non-2xx status",
                endpoint=endpoint,
                http_status=status,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise JupiterAPIError(
                "response was not valid JSON",
                endpoint=endpoint,
                http_status=status,
                body=response.text,
                cause=exc,
            ) from exc

    def close(self) -> None:
        self.session.close()
