import os
from typing import Optional

"""환경 변수에서 bool 타입을 안전하게 읽는다."""


def env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


"""환경 변수에서 콤마/개행 구분 리스트를 안전하게 읽는다."""


def env_list(name: str, default_list):
    v = os.getenv(name)
    if not v:
        return list(default_list)
    parts = [p.strip() for p in v.replace("\n", ",").split(",") if p.strip()]
    return parts or list(default_list)


"""환경 변수에서 float를 읽는다. 비어 있으면 default (None 허용)."""


def env_float(name: str, default: Optional[float]) -> Optional[float]:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return float(v)
