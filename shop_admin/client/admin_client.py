# shop_admin/client/admin_client.py
import json

import requests
from requests.exceptions import RequestException, Timeout, HTTPError

from ..utils.logger import Log


class ApiError(Exception):
    """The admin API answered with an HTTP error status."""
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(f"HTTP {status_code}: {self.payload}")


class ApiConnectionError(Exception):
    """The request never produced an HTTP response (timeout, DNS, refused...)."""


class AdminApiClient:
    """
    Thin client for the store admin API, used by the dashboard forms.
    """
    def __init__(self, base_url, token=None, timeout=10, session=None):
        """
        :param base_url: API origin, e.g. https://admin.example.com
        :param token: bearer token issued by the identity provider.
        :param timeout: Request timeout in seconds (default is 10 seconds).
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _make_request(self, method, endpoint, payload=None, params=None):
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        Log.info(f"[admin_client.py][AdminApiClient] {method} {url}")

        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=payload,
                headers=headers,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except HTTPError as http_err:
            status_code = http_err.response.status_code if http_err.response is not None else 500
            Log.error(f"[admin_client.py][_make_request] HTTP {status_code} from {url}")
            raise ApiError(status_code, _safe_json(http_err.response)) from http_err
        except Timeout as err:
            raise ApiConnectionError(f"Request to {url} timed out after {self.timeout} seconds.") from err
        except RequestException as req_err:
            raise ApiConnectionError(f"Error occurred while making the request: {req_err}.") from req_err

        return _safe_json(response)

    def get(self, endpoint, params=None):
        return self._make_request("GET", endpoint, params=params)

    def post(self, endpoint, payload=None):
        return self._make_request("POST", endpoint, payload=payload)

    def patch(self, endpoint, payload=None):
        return self._make_request("PATCH", endpoint, payload=payload)

    def delete(self, endpoint):
        return self._make_request("DELETE", endpoint)


def _safe_json(response):
    if response is None or not response.text.strip():
        return {}
    try:
        return response.json()
    except json.JSONDecodeError:
        Log.warning(f"[admin_client.py] non-JSON response: {response.text[:200]}")
        return {"message": response.text}
