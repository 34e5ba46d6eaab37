from app.config.settings import settings
from typing import Optional
import logging

from app.services.posture_analysis_service import PostureAnalysisService
from app.domain.validation.validator import RequestValidator
from app.infrastructure.llm.base import InferenceGateway
from app.infrastructure.llm.gateway_client import LLMGatewayClient
from app.infrastructure.llm.noop_client import NoopInferenceClient
from app.infrastructure.llm.openai_client import OpenAIVisionClient

logger = logging.getLogger(__name__)


def create_inference_gateway(
        llm_provider: Optional[str] = None,
        llm_model: Optional[str] = None
) -> InferenceGateway:
    """
    provider 이름 → InferenceGateway 구현체

    Args:
        llm_provider: noop | openai | gateway (없으면 settings 기본값)
        llm_model: 모델명 (없으면 provider별 settings 기본값)
    """
    provider = (llm_provider or settings.LLM_DEFAULT_PROVIDER).lower()
    default_model = settings.LLM_GATEWAY_MODEL if provider == "gateway" else settings.LLM_DEFAULT_MODEL
    model = llm_model or default_model

    if provider not in settings.LLM_PROVIDERS:
        raise ValueError(f"Unsupported llm_provider: {provider} (allowed: {settings.LLM_PROVIDERS})")

    if provider == "openai":
        if not settings.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY is not set")
        return OpenAIVisionClient(
            api_key=settings.OPENAI_API_KEY,
            model=model,
            timeout=settings.LLM_TIMEOUT_SECONDS
        )

    if provider == "gateway":
        if not settings.LLM_GATEWAY_URL:
            raise ValueError("LLM_GATEWAY_URL is not set")
        return LLMGatewayClient(
            gateway_url=settings.LLM_GATEWAY_URL,
            vendor=settings.LLM_GATEWAY_VENDOR,
            model=model,
            api_key=settings.LLM_GATEWAY_API_KEY,
            timeout=settings.LLM_TIMEOUT_SECONDS
        )

    return NoopInferenceClient()


def create_posture_analysis_service(
        llm_provider: Optional[str] = None,
        llm_model: Optional[str] = None
) -> PostureAnalysisService:
    """PostureAnalysisService 인스턴스 생성"""
    return PostureAnalysisService(
        validator=RequestValidator(),
        gateway=create_inference_gateway(llm_provider, llm_model)
    )
