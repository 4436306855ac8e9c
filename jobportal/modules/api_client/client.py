import logging
from typing import Any, Dict, Optional

import requests

from jobportal.config.settings import PortalSettings, get_settings
from jobportal.core.exceptions import ApiError, SessionExpiredError
from jobportal.modules.api_client.session import AuthSession

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"
NETWORK_ERROR = "Network error"


class ApiClient:
    """Thin HTTP wrapper around the portal REST API.

    Adds the bearer token of the injected ``AuthSession`` to every call and
    turns failures into ``ApiError``. A 401 answer expires the session and
    raises ``SessionExpiredError``.
    """

    def __init__(self, session: Optional[AuthSession] = None,
                 settings: Optional[PortalSettings] = None,
                 http: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.api_base_url
        self.timeout = self.settings.request_timeout_seconds
        self.session = session or AuthSession()
        self.http = http or requests.Session()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    def _headers(self, json_body: bool = True) -> Dict[str, str]:
        headers = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def request(self, method: str, path: str, *,
                params: Optional[Dict[str, Any]] = None,
                json: Optional[Dict[str, Any]] = None,
                data: Optional[Dict[str, Any]] = None,
                files: Any = None) -> Dict[str, Any]:
        """Perform one call and return the decoded JSON body."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug(f"{method} {url} params={params}")
        try:
            response = self.http.request(
                method,
                url,
                params=params or None,
                json=json,
                data=data,
                files=files,
                headers=self._headers(json_body=files is None and data is None),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ApiError(NETWORK_ERROR) from e

        return self._handle_response(method, url, response)

    def _handle_response(self, method: str, url: str, response: requests.Response) -> Dict[str, Any]:
        if response.status_code == 401:
            self.session.expire()
            raise SessionExpiredError(self._error_message(response), status_code=401)

        if not response.ok:
            message = self._error_message(response)
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=self._safe_json(response))

        body = self._safe_json(response)
        if body is None:
            raise ApiError(NETWORK_ERROR, status_code=response.status_code)
        return body

    @staticmethod
    def _safe_json(response: requests.Response) -> Optional[Dict[str, Any]]:
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else {"data": body}

    def _error_message(self, response: requests.Response) -> str:
        body = self._safe_json(response)
        if body is None:
            return NETWORK_ERROR
        return body.get("message") or GENERIC_ERROR

    def get(self, path: str, **params) -> Dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.request("DELETE", path, json=json)

    def server_url(self, path: str) -> str:
        """Absolute URL on the server origin, for media and resume links."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.settings.server_base_url}/{path.lstrip('/')}"
