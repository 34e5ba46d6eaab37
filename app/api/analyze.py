from fastapi import APIRouter, UploadFile, File, Form, Depends, HTTPException
import logging

from app.common.dependencies import verify_api_key, get_posture_analysis_service
from app.common.errors import InferenceError, ValidationError
from app.domain.media.encoder import encode_data_uri
from app.schemas.analysis_dto import (
    AnalysisResult,
    AnalyzeMediaApiRequest,
    AnalyzePostureApiResponse,
    MediaMode,
)
from app.services.posture_analysis_service import PostureAnalysisService
from app.services.result_view import INFERENCE_FAILED_MESSAGE, UNEXPECTED_ERROR_MESSAGE

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analyze", tags=["Posture Analysis"])


# ========== API Endpoint ==========
@router.post("/frame", response_model=AnalyzePostureApiResponse)
async def analyze_frame(
        req: AnalyzeMediaApiRequest,
        _: bool = Depends(verify_api_key),
        service: PostureAnalysisService = Depends(get_posture_analysis_service)
) -> AnalyzePostureApiResponse:
    """웹캠 스냅샷 1장 분석 (media: data:image/...)"""
    return await _run(service, req.media, req.activity, MediaMode.frame)


@router.post("/clip", response_model=AnalyzePostureApiResponse)
async def analyze_clip(
        req: AnalyzeMediaApiRequest,
        _: bool = Depends(verify_api_key),
        service: PostureAnalysisService = Depends(get_posture_analysis_service)
) -> AnalyzePostureApiResponse:
    """녹화 클립 분석 (media: data:video/...)"""
    return await _run(service, req.media, req.activity, MediaMode.clip)


@router.post("/upload", response_model=AnalyzePostureApiResponse)
async def analyze_upload(
        file: UploadFile = File(..., description="이미지 또는 비디오 파일"),
        activity: str = Form(..., description="squat | desk_sitting"),
        mode: str = Form(default=MediaMode.clip.value, description="frame | clip"),
        _: bool = Depends(verify_api_key),
        service: PostureAnalysisService = Depends(get_posture_analysis_service)
) -> AnalyzePostureApiResponse:
    """
    업로드 파일 분석

    파일은 디스크에 저장하지 않고 바로 data URI로 인코딩한다.
    """
    content = await file.read()
    mime_type = file.content_type or "application/octet-stream"
    logger.info(f"📥 업로드 수신: {file.filename} ({mime_type}, {len(content)} bytes)")

    media = encode_data_uri(content, mime_type)
    return await _run(service, media, activity, mode)


async def _run(
        service: PostureAnalysisService,
        media: str,
        activity: str,
        mode,
) -> AnalyzePostureApiResponse:
    try:
        result: AnalysisResult = await service.analyze(media, activity, mode)

    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    except InferenceError as e:
        logger.error(f"❌ 추론 실패: {e.message}")
        raise HTTPException(status_code=502, detail=INFERENCE_FAILED_MESSAGE)

    except Exception as e:
        logger.error(f"❌ 분석 실패: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=UNEXPECTED_ERROR_MESSAGE)

    return AnalyzePostureApiResponse(posture_analysis=result, provider=service.provider)


ROUTERS = [router]
