"""
InferenceGateway 공통 인터페이스 + provider 응답 파서
"""
from __future__ import annotations
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from app.common.errors import InferenceError
from app.schemas.analysis_dto import AnalysisRequest, AnalysisResult, PostureAnalysisReply

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class InferenceGateway(ABC):
    """
    외부 추론 provider 경계 (메서드 1개)

    - 요청마다 독립적, 상태 없음
    - 재시도 없음: 1회 시도 후 실패하면 InferenceError
    - 실제 포즈 추정 파이프라인으로 교체해도 계약은 그대로 유지
    """

    provider: str = "unknown"

    @abstractmethod
    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        ...


def parse_reply(raw: Union[str, bytes, dict, Any]) -> AnalysisResult:
    """
    provider 출력 → AnalysisResult

    Args:
        raw: JSON 문자열 또는 이미 디코딩된 dict

    Raises:
        InferenceError: JSON 파싱 실패 / 스키마 불일치 (부분 결과는 절대 반환하지 않음)
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    if isinstance(raw, str):
        text = raw.strip()
        # 모델이 ```json ... ``` 으로 감싸 보내는 경우
        m = _CODE_FENCE.match(text)
        if m:
            text = m.group(1)
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Provider reply is not JSON: {e}")
            raise InferenceError("provider reply is not valid JSON", cause=e) from e

    try:
        reply = PostureAnalysisReply.model_validate(raw)
    except PydanticValidationError as e:
        logger.error(f"❌ Provider reply does not match schema: {e.errors()}")
        raise InferenceError("provider reply does not match the expected shape", cause=e) from e

    return reply.posture_analysis
