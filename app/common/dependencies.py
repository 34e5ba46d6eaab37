from fastapi import Header, HTTPException, Query
from typing import Optional
from app.config.settings import settings
from app.services.posture_analysis_service import PostureAnalysisService
from app.services.service_factory import create_posture_analysis_service
from app.utils.enums.enums import LLMProviderEnum
import logging

logger = logging.getLogger(__name__)


# API Key 인증
async def verify_api_key(
        x_internal_api_key: Optional[str] = Header(None, alias="X-Internal-Api-Key")
):
    if x_internal_api_key is None:
        logger.warning("⚠️ Missing X-Internal-Api-Key header")
        raise HTTPException(
            status_code=401,
            detail="Missing X-Internal-Api-Key header"
        )

    if x_internal_api_key != settings.INTERNAL_API_KEY:
        logger.warning(f"❌ Invalid API Key: {x_internal_api_key[:10]}...")
        raise HTTPException(
            status_code=401,
            detail="Invalid Internal API Key"
        )

    return True


# Query → Service 생성
async def get_posture_analysis_service(
        llm_provider: Optional[LLMProviderEnum] = Query(
            default=None,
            description="LLM 제공자 (없으면 서버 기본값)"
        ),
        llm_model: Optional[str] = Query(
            default=None,
            description="LLM 모델명 (예: gpt-4o-mini)"
        ),
) -> PostureAnalysisService:
    """
    요청별 provider/model override를 반영한 PostureAnalysisService 생성

    provider 설정 오류(키 누락, 미지원 provider)는 400으로 돌려준다.
    """
    try:
        return create_posture_analysis_service(
            llm_provider=llm_provider.value if llm_provider else None,
            llm_model=llm_model
        )
    except ValueError as e:
        logger.warning(f"⚠️ LLM 설정 오류: {e}")
        raise HTTPException(status_code=400, detail=str(e))
