"""
분석 결과 / 예외 → 화면 표시용 메시지 변환
내부 예외 메시지는 사용자에게 그대로 노출하지 않는다 (ValidationError 제외).
"""
from dataclasses import dataclass, asdict
from typing import Literal

from app.common.errors import AnalysisInProgressError, InferenceError, ValidationError
from app.schemas.analysis_dto import AnalysisResult

ViewStatus = Literal["success", "warning", "error"]

INFERENCE_FAILED_MESSAGE = "Posture analysis failed. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


@dataclass(frozen=True)
class AnalysisView:
    status: ViewStatus
    title: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.status == "error"

    def to_dict(self) -> dict:
        return asdict(self)


def render_result(result: AnalysisResult) -> AnalysisView:
    if result.is_correct:
        return AnalysisView(status="success", title="Great Posture!", message=result.feedback)
    return AnalysisView(status="warning", title="Posture Needs Improvement", message=result.feedback)


def render_error(error: BaseException) -> AnalysisView:
    if isinstance(error, ValidationError):
        return AnalysisView(
            status="error",
            title="Invalid Request",
            message=f"Invalid {error.field}: {error.message}",
        )
    if isinstance(error, AnalysisInProgressError):
        return AnalysisView(status="error", title="Analysis Busy", message=str(error))
    if isinstance(error, InferenceError):
        return AnalysisView(status="error", title="Analysis Error", message=INFERENCE_FAILED_MESSAGE)
    return AnalysisView(status="error", title="Analysis Error", message=UNEXPECTED_ERROR_MESSAGE)
