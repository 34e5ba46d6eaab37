from __future__ import annotations
from enum import Enum
from app.config.settings import settings


# 세션(UI) 상태: 단일 전이만 존재
class AnalyzerState(str, Enum):
    idle = "idle"
    capturing = "capturing"
    recording = "recording"
    analyzing = "analyzing"


# 동적 Enum: settings.LLM_PROVIDERS를 Swagger 드롭다운으로 노출
LLMProviderEnum = Enum(
    "LLMProviderEnum",
    {name.upper().replace("-", "_"): name for name in settings.LLM_PROVIDERS},
    type=str,
)
