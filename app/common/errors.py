"""
자세 분석 파이프라인 예외 계층

- ValidationError: 요청 형식 오류 (provider 호출 전에 차단)
- InferenceError: provider 호출 실패 또는 응답 스키마 불일치
- AnalysisInProgressError: 세션에 이미 진행 중인 요청이 있음
"""
from typing import Optional


class PostureAnalysisError(Exception):
    """자세 분석 관련 예외의 공통 부모"""


class ValidationError(PostureAnalysisError):
    """잘못된 요청 (MIME prefix, activity 값 등)"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class InferenceError(PostureAnalysisError):
    """provider 호출 실패 (네트워크/쿼터/타임아웃) 또는 응답 파싱 실패"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class AnalysisInProgressError(PostureAnalysisError):
    """이미 분석 요청이 진행 중일 때 수동 분석을 거부"""

    def __init__(self, message: str = "An analysis is already in progress."):
        super().__init__(message)
