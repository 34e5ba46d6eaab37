"""
OpenAI SDK 지연 로딩(lazy import) + 캐시 헬퍼

openai 패키지는 provider=openai 일 때만 import한다. import 결과(성공/실패)와
api_key별 SDK 클라이언트를 전역 캐시에 두고 다음 호출부터 재사용한다.
"""

from __future__ import annotations
import importlib, threading, logging
from typing import Any, Dict, List, Optional
from app.utils.types.types import Message

logger = logging.getLogger(__name__)
_lock = threading.Lock()

_sdk: Dict[str, Any] = {"OpenAI": None, "available": None}
_clients: Dict[str, Any] = {}


def _openai_cls() -> Optional[type]:
    if _sdk["available"] is not None:
        return _sdk["OpenAI"]
    with _lock:
        if _sdk["available"] is None:
            try:
                _sdk["OpenAI"] = getattr(importlib.import_module("openai"), "OpenAI")
                _sdk["available"] = True
                logger.info("[LLM] OpenAI SDK loaded (lazy)")
            except ImportError as e:
                _sdk["available"] = False
                logger.warning(f"[LLM] OpenAI SDK import failed: {e}")
    return _sdk["OpenAI"]


class OpenAIStructuredChat:
    """SDK 의존성 분리를 위한 어댑터: 구조화(JSON) 응답 .chat() 만 노출"""

    def __init__(self, sdk_client: Any):
        self._client = sdk_client

    def chat(
        self,
        *,
        model: str,
        messages: List[Message],
        temperature: float,
        response_format: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> str:
        kwargs: Dict[str, Any] = {}
        # None이면 SDK 기본 timeout
        if timeout is not None:
            kwargs["timeout"] = timeout

        resp = self._client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            response_format=response_format,
            **kwargs,
        )
        return (resp.choices[0].message.content or "").strip()


def get_openai_adapter(api_key: str) -> OpenAIStructuredChat:
    """성공 시 SDK 래퍼, SDK가 없으면 RuntimeError (상위에서 InferenceError로 변환)"""
    OpenAI = _openai_cls()
    if OpenAI is None:
        raise RuntimeError("OpenAI SDK unavailable")
    with _lock:
        client = _clients.get(api_key)
        if client is None:
            client = _clients[api_key] = OpenAI(api_key=api_key)
    return OpenAIStructuredChat(client)
