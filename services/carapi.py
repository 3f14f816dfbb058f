# services/carapi.py
"""
Client for the car inventory REST resource ({API_URL}/carapi).

    GET    /all           -> [Car]
    POST   /add           -> created Car or status
    PUT    /update        -> updated Car or status
    DELETE /delete/{id}   -> text confirmation
    GET    /get/{id}      -> Car, or an error status when missing
"""
import json
import logging
from typing import Any, List, Optional, Union
from urllib.parse import quote

from domain.car import Car
from services.config import Settings
from services.http import CarApiError, Http

logger = logging.getLogger(__name__)


def _body(r) -> Any:
    """JSON when the backend sends JSON, the raw text otherwise ("or status")."""
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text


class CarApi:
    def __init__(self, settings: Optional[Settings] = None, http: Optional[Http] = None):
        self.settings = settings or Settings()
        self.http = http or Http(user_agent=self.settings.user_agent, timeout=self.settings.timeout)
        self.base = self.settings.base_url

    def _url(self, path: str) -> str:
        return f"{self.base}{path}"

    def list_all(self) -> List[Car]:
        data = self.http.get_json(self._url("/all"))
        if not isinstance(data, list):
            raise CarApiError(f"/all returned {type(data).__name__}, expected a list",
                              url=self._url("/all"))
        try:
            return [Car.from_dict(it) for it in data]
        except TypeError as e:
            raise CarApiError(f"/all returned a malformed car: {e}", url=self._url("/all")) from e

    def get(self, car_id: Union[str, int]) -> Car:
        url = self._url(f"/get/{quote(str(car_id), safe='')}")
        data = self.http.get_json(url) if str(car_id) else None
        # שרתים מסוימים מחזירים 200 עם גוף ריק כשאין רכב
        if not isinstance(data, dict) or not data:
            raise CarApiError(f"car {car_id!r} not found", url=url, status_code=404)
        return Car.from_dict(data)

    def add(self, car: Car) -> Any:
        payload = car.to_payload()
        payload["id"] = ""
        return _body(self.http.request("POST", self._url("/add"), json=payload))

    def update(self, car: Car) -> Any:
        return _body(self.http.request("PUT", self._url("/update"), json=car.to_payload()))

    def delete(self, car_id: Union[str, int]) -> str:
        r = self.http.request("DELETE", self._url(f"/delete/{quote(str(car_id), safe='')}"))
        text = r.text or ""
        # Spring מחזיר לעיתים מחרוזת JSON במקום טקסט
        if text.startswith('"') and text.endswith('"'):
            try:
                text = json.loads(text)
            except ValueError:
                pass
        return str(text)
