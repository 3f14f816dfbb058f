from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Literal, Union

Status = Literal["Available", "Sold", "Maintenance"]
STATUSES = ("Available", "Sold", "Maintenance")
DEFAULT_STATUS: Status = "Available"

# שדות חובה לפני שליחה לשרת
REQUIRED_FIELDS = ("brand", "model", "year", "price")

Number = Union[int, float, str]


def _to_int(v: Any) -> Any:
    if isinstance(v, bool):
        return v
    try:
        return int(str(v).strip())
    except (TypeError, ValueError):
        pass
    try:
        f = float(str(v).strip())
        return int(f) if f.is_integer() else v
    except (TypeError, ValueError):
        return v


def _to_float(v: Any) -> Any:
    if isinstance(v, bool):
        return v
    try:
        return float(str(v).strip())
    except (TypeError, ValueError):
        return v


@dataclass(frozen=True)
class Car:
    id: Union[str, int] = ""
    brand: str = ""
    model: str = ""
    year: Number = ""
    price: Number = ""
    status: Status = DEFAULT_STATUS

    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Car":
        """
        Builds a Car from a backend JSON object.
        Unknown keys are dropped, missing keys fall back to the draft defaults.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        known = {k: v for k, v in data.items() if k in cls.field_names()}
        for k in ("id", "brand", "model", "year", "price"):
            if known.get(k) is None:
                known[k] = ""
        if not known.get("status"):
            known["status"] = DEFAULT_STATUS
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for /add and /update; form strings become numbers where they parse."""
        body = self.to_dict()
        if body["year"] != "":
            body["year"] = _to_int(body["year"])
        if body["price"] != "":
            body["price"] = _to_float(body["price"])
        return body

    def with_field(self, name: str, value: Any) -> "Car":
        if name not in self.field_names():
            raise KeyError(name)
        return replace(self, **{name: value})

    def missing_fields(self) -> list:
        out = []
        for name in REQUIRED_FIELDS:
            v = getattr(self, name)
            if v is None or (isinstance(v, str) and not v.strip()):
                out.append(name)
        return out

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()


def empty_draft() -> Car:
    return Car()
