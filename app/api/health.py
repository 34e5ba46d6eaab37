from fastapi import APIRouter, HTTPException
from app.config.settings import settings
from app.services.service_factory import create_inference_gateway

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/llm/health")
def llm_health():
    """기본 provider 구성 확인 (실제 추론 호출은 하지 않음 → 과금 없음)"""
    try:
        gateway = create_inference_gateway()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"{type(e).__name__}: {e}")

    return {
        "ok": True,
        "provider": gateway.provider,
        "model": settings.LLM_DEFAULT_MODEL,
        "providers": settings.LLM_PROVIDERS,
    }


ROUTERS = [router]
