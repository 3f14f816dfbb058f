import json

import pytest
import requests

from domain.car import Car
from services.carapi import CarApi
from services.config import Settings
from services.http import CarApiError, Http

BASE = "http://cars.test/carapi"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None, url=""):
        self.status_code = status_code
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text
        self.content = text.encode("utf-8")
        self.url = url

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records every request and answers from a queue of FakeResponse / exceptions."""

    def __init__(self, *answers):
        self.headers = {}
        self.calls = []
        self.answers = list(answers)

    def request(self, method, url, json=None, params=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        ans = self.answers.pop(0)
        if isinstance(ans, Exception):
            raise ans
        ans.url = url
        return ans

    def close(self):
        pass


def make_api(*answers):
    sess = FakeSession(*answers)
    settings = Settings(api_url="http://cars.test/", timeout=4)
    api = CarApi(settings, http=Http(timeout=settings.timeout, session=sess))
    return api, sess


@pytest.mark.timeout(5)
def test_list_all():
    api, sess = make_api(FakeResponse(body=[
        {"id": 1, "brand": "Kia", "model": "Rio", "year": 2019, "price": 9500, "status": "Sold"},
    ]))
    cars = api.list_all()
    assert cars == [Car(id=1, brand="Kia", model="Rio", year=2019, price=9500, status="Sold")]
    assert sess.calls[0]["method"] == "GET"
    assert sess.calls[0]["url"] == f"{BASE}/all"
    assert sess.calls[0]["timeout"] == 4
    assert sess.headers["Accept"] == "application/json"


@pytest.mark.timeout(5)
def test_list_all_rejects_non_list():
    api, _ = make_api(FakeResponse(body={"cars": []}))
    with pytest.raises(CarApiError):
        api.list_all()


@pytest.mark.timeout(5)
def test_add_posts_payload_with_blank_id():
    api, sess = make_api(FakeResponse(body={"id": 10}))
    draft = Car(id="stale", brand="Toyota", model="Corolla", year=2022, price=18999.99)
    assert api.add(draft) == {"id": 10}
    call = sess.calls[0]
    assert (call["method"], call["url"]) == ("POST", f"{BASE}/add")
    assert call["json"] == {"id": "", "brand": "Toyota", "model": "Corolla",
                            "year": 2022, "price": 18999.99, "status": "Available"}


@pytest.mark.timeout(5)
def test_update_puts_with_id_and_accepts_text_status():
    api, sess = make_api(FakeResponse(text="updated"))
    out = api.update(Car(id=5, brand="A", model="B", year="2001", price="1"))
    assert out == "updated"
    assert sess.calls[0]["method"] == "PUT"
    assert sess.calls[0]["url"] == f"{BASE}/update"
    assert sess.calls[0]["json"]["id"] == 5


@pytest.mark.timeout(5)
@pytest.mark.parametrize("raw,expected", [
    ("Car deleted successfully", "Car deleted successfully"),
    ('"Car deleted successfully"', "Car deleted successfully"),
])
def test_delete_returns_text(raw, expected):
    api, sess = make_api(FakeResponse(text=raw))
    assert api.delete(8) == expected
    assert sess.calls[0]["url"] == f"{BASE}/delete/8"


@pytest.mark.timeout(5)
def test_get_found():
    api, sess = make_api(FakeResponse(body={"id": 2, "brand": "VW", "model": "Golf",
                                            "year": 2018, "price": 12000, "status": "Available"}))
    assert api.get("2").model == "Golf"
    assert sess.calls[0]["url"] == f"{BASE}/get/2"


@pytest.mark.timeout(5)
@pytest.mark.parametrize("answer", [
    FakeResponse(status_code=404, text="Not Found"),
    FakeResponse(status_code=200, text=""),
    FakeResponse(status_code=500, text="boom"),
    requests.ConnectionError("refused"),
])
def test_get_failures_raise(answer):
    api, _ = make_api(answer)
    with pytest.raises(CarApiError):
        api.get("404")


def test_get_blank_id_sends_nothing():
    api, sess = make_api()
    with pytest.raises(CarApiError):
        api.get("")
    assert sess.calls == []


@pytest.mark.timeout(5)
def test_http_error_carries_status():
    api, _ = make_api(FakeResponse(status_code=503, text="down"))
    with pytest.raises(CarApiError) as ei:
        api.delete(1)
    assert ei.value.status_code == 503
    assert ei.value.url == f"{BASE}/delete/1"


@pytest.mark.timeout(5)
def test_transport_error_is_wrapped():
    api, _ = make_api(requests.Timeout("slow"))
    with pytest.raises(CarApiError) as ei:
        api.list_all()
    assert ei.value.status_code is None
    assert isinstance(ei.value.__cause__, requests.Timeout)


@pytest.mark.timeout(5)
def test_bad_json_body():
    api, _ = make_api(FakeResponse(text="<html>"))
    with pytest.raises(CarApiError):
        api.list_all()
