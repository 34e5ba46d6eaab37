"""
Pytest Configuration & Shared Fixtures

이 파일은 모든 테스트에서 재사용 가능한 fixture를 정의합니다.
settings는 import 시점에 환경변수를 읽으므로, app import 전에 테스트용 값을 고정합니다.
"""
import os

os.environ["ENV"] = "test"
os.environ["INTERNAL_API_KEY"] = "test-api-key"
os.environ["LLM_DEFAULT_PROVIDER"] = "noop"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("LLM_TIMEOUT_SECONDS", None)

import asyncio
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from app.domain.validation.validator import RequestValidator
from app.infrastructure.llm.base import InferenceGateway
from app.schemas.analysis_dto import AnalysisResult
from app.services.posture_analysis_service import PostureAnalysisService


# ========================================
# Application Fixtures
# ========================================

@pytest.fixture(scope="session")
def app():
    """FastAPI 애플리케이션 인스턴스"""
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture(scope="session")
def client(app):
    """FastAPI TestClient (API 테스트용)"""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """인증 헤더 (X-Internal-Api-Key)"""
    return {"X-Internal-Api-Key": "test-api-key"}


# ========================================
# Media Fixtures
# ========================================

@pytest.fixture
def frame_media() -> str:
    """최소 JPEG data URI"""
    return "data:image/jpeg;base64,AAAA"


@pytest.fixture
def clip_media() -> str:
    """최소 WebM data URI"""
    return "data:video/webm;base64,GkXfow=="


@pytest.fixture
def frame_source():
    """주기 캡처용 프레임 공급자 (bytes, mime)"""
    return lambda: (b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")


# ========================================
# Gateway / Service Fixtures
# ========================================

@pytest.fixture
def good_result() -> AnalysisResult:
    return AnalysisResult(is_correct=True, feedback="Good form.")


@pytest.fixture
def mock_gateway(good_result):
    """Mock InferenceGateway (AsyncMock.analyze)"""
    gateway = AsyncMock(spec=InferenceGateway)
    gateway.provider = "mock"
    gateway.analyze.return_value = good_result
    return gateway


@pytest.fixture
def service(mock_gateway) -> PostureAnalysisService:
    """Mock gateway를 쓰는 PostureAnalysisService"""
    return PostureAnalysisService(validator=RequestValidator(), gateway=mock_gateway)


class BlockingGateway(InferenceGateway):
    """release 될 때까지 응답을 붙잡는 gateway (in-flight 상태 재현용)"""

    provider = "blocking"

    def __init__(self, result: AnalysisResult):
        self.result = result
        self.release = asyncio.Event()
        self.calls = 0

    async def analyze(self, request):
        self.calls += 1
        await self.release.wait()
        return self.result


@pytest.fixture
def blocking_gateway(good_result):
    return BlockingGateway(good_result)
