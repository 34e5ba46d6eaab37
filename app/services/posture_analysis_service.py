"""
자세 분석 Service Layer
검증 → 추론 게이트웨이 호출을 하나의 요청/응답 사이클로 묶는다
"""
import logging
import time
from typing import Union

from app.domain.validation.validator import RequestValidator
from app.infrastructure.llm.base import InferenceGateway
from app.schemas.analysis_dto import Activity, AnalysisRequest, AnalysisResult, MediaMode

logger = logging.getLogger(__name__)


class PostureAnalysisService:
    """
    자세 분석 메인 서비스

    책임:
    - 요청 검증 (실패 시 provider 호출 없이 ValidationError)
    - InferenceGateway 1회 호출 (재시도 없음)
    - 예외는 변환하지 않고 상위(Router/Session)로 전달
    """

    def __init__(self, validator: RequestValidator, gateway: InferenceGateway):
        """
        Args:
            validator: 요청 검증기
            gateway: 추론 provider (noop / openai / gateway)
        """
        self.validator = validator
        self.gateway = gateway

    @property
    def provider(self) -> str:
        return self.gateway.provider

    async def analyze(
        self,
        media: str,
        activity: Union[str, Activity],
        mode: Union[str, MediaMode] = MediaMode.frame,
    ) -> AnalysisResult:
        request = self.validator.validate(media, activity, mode)
        return await self.analyze_request(request)

    async def analyze_request(self, request: AnalysisRequest) -> AnalysisResult:
        request = self.validator.validate_request(request)

        logger.info(
            f"🔄 자세 분석 요청: activity={request.activity.value}, mode={request.mode.value}, "
            f"mime={request.mime_type}, provider={self.provider}"
        )
        started = time.perf_counter()
        result = await self.gateway.analyze(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(f"✅ 자세 분석 완료: is_correct={result.is_correct} ({elapsed_ms:.0f}ms)")
        return result
