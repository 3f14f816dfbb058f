# services/http.py
import logging
from typing import Any, Dict, Optional

import requests

from services.config import DEFAULT_TIMEOUT, DEFAULT_UA

logger = logging.getLogger(__name__)


class CarApiError(RuntimeError):
    """Any failure talking to the car backend (transport, HTTP status, bad body)."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class Http:
    """
    requests.Session wrapper: JSON headers, one timeout for every call, and
    CarApiError for anything that is not a 2xx/3xx answer.
    No retries - a failed call is reported once and the caller decides.
    """
    def __init__(self, user_agent: str = DEFAULT_UA, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.sess = session or requests.Session()
        self.sess.headers.update({
            "User-Agent": user_agent or DEFAULT_UA,
            "Accept": "application/json",
        })

    def request(self, method: str, url: str, json: Any = None,
                params: Optional[Dict[str, Any]] = None) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            r = self.sess.request(method, url, json=json, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise CarApiError(f"{method} {url} failed: {e}", url=url) from e
        if r.status_code >= 400:
            raise CarApiError(f"{method} {url} -> HTTP {r.status_code}: {r.text[:200]}",
                              url=url, status_code=r.status_code)
        return r

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.json_of(self.request("GET", url, params=params))

    @staticmethod
    def json_of(r: requests.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise CarApiError(f"{r.url} returned a non-JSON body: {r.text[:200]}",
                              url=r.url or "", status_code=r.status_code) from e

    def close(self) -> None:
        self.sess.close()
