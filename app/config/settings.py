from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# helpers
from app.config.env_utils import env_bool, env_float, env_list


# ─────────────────────────────────────────────────────────
# Project root 탐색
#   - .git / pyproject.toml / requirements.txt 중 하나가 보이는 최상단을 루트로 간주
#   - 실패 시 BASE_DIR 환경변수 사용
# ─────────────────────────────────────────────────────────
def find_project_root() -> Path:
    cur = Path(__file__).resolve()
    for parent in cur.parents:
        if any(
            (parent / m).exists()
            for m in (".git", "pyproject.toml", "requirements.txt")
        ):
            return parent
    env_root = os.getenv("BASE_DIR")
    if env_root:
        return Path(env_root).resolve()
    raise RuntimeError(
        "프로젝트 루트를 찾을 수 없습니다. "
        "루트에 .git/pyproject.toml/requirements.txt 중 하나를 두거나, "
        "환경변수 BASE_DIR을 지정하세요."
    )


ROOT: Path = find_project_root()

# ─────────────────────────────────────────────────────────
# .env 로딩
#   - ENV_FILE 지정 시 우선
#   - 없으면 ROOT/.env.<ENV> → 없으면 ROOT/.env
# ─────────────────────────────────────────────────────────
_DEFAULT_ENV = os.getenv("ENV", "test")
_env_file_candidate = ROOT / f".env.{_DEFAULT_ENV}"
_ENV_FILE = (
    Path(os.getenv("ENV_FILE")).resolve()
    if os.getenv("ENV_FILE")
    else (_env_file_candidate if _env_file_candidate.exists() else (ROOT / ".env"))
)
load_dotenv(dotenv_path=_ENV_FILE, override=False)


class Settings:
    # ── App / Runtime ─────────────────────────────────────
    ENV: str = os.getenv("ENV", _DEFAULT_ENV)
    FASTAPI_PORT: int = int(os.getenv("FASTAPI_PORT", 8000))
    DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # ── 내부 인증 ─────────────────────────────────────────
    INTERNAL_API_KEY: Optional[str] = os.getenv("INTERNAL_API_KEY")

    # ── LLM (추론 provider) ───────────────────────────────
    # noop: 네트워크 호출 없음 / openai: OpenAI SDK 직접 / gateway: 사내 LLM Gateway
    LLM_PROVIDERS = env_list("LLM_PROVIDERS", ["noop", "openai", "gateway"])
    LLM_DEFAULT_PROVIDER: str = os.getenv("LLM_DEFAULT_PROVIDER", "noop")
    LLM_DEFAULT_MODEL: str = os.getenv("LLM_DEFAULT_MODEL", "gpt-4o-mini")
    LLM_GATEWAY_URL: str = os.getenv("LLM_GATEWAY_URL", "http://localhost:3030")
    LLM_GATEWAY_VENDOR: str = os.getenv("LLM_GATEWAY_VENDOR", "gemini")
    LLM_GATEWAY_MODEL: str = os.getenv("LLM_GATEWAY_MODEL", "gemini-2.0-flash")
    LLM_GATEWAY_API_KEY: Optional[str] = os.getenv("LLM_GATEWAY_API_KEY")
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")

    # 미설정이면 provider transport 기본값을 그대로 사용
    LLM_TIMEOUT_SECONDS: Optional[float] = env_float("LLM_TIMEOUT_SECONDS", None)

    # ── 주기 캡처 ─────────────────────────────────────────
    CAPTURE_INTERVAL_SECONDS: float = env_float("CAPTURE_INTERVAL_SECONDS", 5.0)


# 전역 싱글톤처럼 사용
settings = Settings()
