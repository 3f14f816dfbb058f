from services.config import DEFAULT_API_URL, Settings

ENV_KEYS = ("CAR_API_URL", "VITE_API_URL", "CAR_API_TIMEOUT", "CAR_API_USER_AGENT", "LOG_LEVEL")


def _clear(monkeypatch):
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    s = Settings.from_env(dotenv=False)
    assert s.api_url == DEFAULT_API_URL
    assert s.base_url == f"{DEFAULT_API_URL}/carapi"
    assert s.timeout == 10


def test_env_overrides(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("CAR_API_URL", "https://inventory.example.com/")
    monkeypatch.setenv("CAR_API_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings.from_env(dotenv=False)
    assert s.base_url == "https://inventory.example.com/carapi"
    assert s.timeout == 2.5
    assert s.log_level == "DEBUG"


def test_vite_name_still_read(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("VITE_API_URL", "http://legacy:9000")
    assert Settings.from_env(dotenv=False).base_url == "http://legacy:9000/carapi"


def test_bad_timeout_falls_back(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("CAR_API_TIMEOUT", "soon")
    assert Settings.from_env(dotenv=False).timeout == 10
