"""
자세 분석 DTO
Validator ↔ InferenceGateway ↔ Router 간 데이터 전달용
"""
from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class Activity(str, Enum):
    """분석할 자세 종류"""
    squat = "squat"
    desk_sitting = "desk_sitting"


class MediaMode(str, Enum):
    """캡처 모드: 단일 프레임(image) / 녹화·업로드 클립(video)"""
    frame = "frame"
    clip = "clip"

    @property
    def data_uri_prefix(self) -> str:
        return "data:image/" if self is MediaMode.frame else "data:video/"


# ============ Core DTO ============
class AnalysisRequest(BaseModel):
    """검증을 통과한 분석 요청 (생성 후 불변, 1회 전송 후 폐기)"""
    model_config = ConfigDict(frozen=True)

    media: str = Field(..., min_length=1, description="data:<mime>;base64,<payload>")
    activity: Activity = Field(..., description="자세 종류")
    mode: MediaMode = Field(default=MediaMode.frame, description="frame | clip")

    @property
    def mime_type(self) -> str:
        # "data:image/jpeg;base64,..." → "image/jpeg"
        return self.media[len("data:"):].split(";", 1)[0]


class AnalysisResult(BaseModel):
    """provider가 판단한 자세 결과"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"isCorrect": False, "feedback": "무릎이 발끝보다 앞으로 나갑니다."}
        },
    )

    is_correct: StrictBool = Field(..., alias="isCorrect", description="자세가 올바른지 여부")
    feedback: StrictStr = Field(..., description="교정 방법을 포함한 피드백")


class PostureAnalysisReply(BaseModel):
    """provider 구조화 출력 envelope: {"postureAnalysis": {...}}"""
    model_config = ConfigDict(populate_by_name=True)

    posture_analysis: AnalysisResult = Field(..., alias="postureAnalysis")


# ============ API DTO ============
class AnalyzeMediaApiRequest(BaseModel):
    """JSON body. 값 검증은 RequestValidator가 담당하므로 여기선 문자열로 받는다."""
    media: str = Field(..., description="data URI (frame: data:image/..., clip: data:video/...)")
    activity: str = Field(..., description="squat | desk_sitting")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"media": "data:image/jpeg;base64,/9j/4AAQSkZJRg...", "activity": "squat"}
        }
    )


class AnalyzePostureApiResponse(BaseModel):
    """분석 API 응답 (provider envelope 형태 그대로)"""
    model_config = ConfigDict(populate_by_name=True)

    posture_analysis: AnalysisResult = Field(..., alias="postureAnalysis")
    provider: Optional[str] = Field(default=None, description="사용된 LLM provider")
