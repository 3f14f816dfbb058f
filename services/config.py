# services/config.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 10
DEFAULT_UA = "CarDashboard/1.0"
RESOURCE_PATH = "/carapi"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _to_float_or_default(val, default: float) -> float:
    try:
        v = float(val)
        return v if v > 0 else default
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_UA
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        return f"{self.api_url.rstrip('/')}{RESOURCE_PATH}"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Reads CAR_API_URL (or VITE_API_URL, the name the old frontend build used),
        CAR_API_TIMEOUT, CAR_API_USER_AGENT and LOG_LEVEL.
        """
        if dotenv:
            load_dotenv()
        api_url = os.getenv("CAR_API_URL") or os.getenv("VITE_API_URL") or DEFAULT_API_URL
        return cls(
            api_url=api_url.strip().rstrip("/"),
            timeout=_to_float_or_default(os.getenv("CAR_API_TIMEOUT"), DEFAULT_TIMEOUT),
            user_agent=os.getenv("CAR_API_USER_AGENT") or DEFAULT_UA,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
