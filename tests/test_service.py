"""
Service Layer Tests

PostureAnalysisService / service_factory 테스트
"""
import pytest
from unittest.mock import patch

from app.common.errors import InferenceError, ValidationError
from app.infrastructure.llm.gateway_client import LLMGatewayClient
from app.infrastructure.llm.noop_client import NoopInferenceClient
from app.infrastructure.llm.openai_client import OpenAIVisionClient
from app.schemas.analysis_dto import Activity, AnalysisRequest, MediaMode


class TestPostureAnalysisService:
    """PostureAnalysisService 테스트"""

    @pytest.mark.asyncio
    async def test_analyze_success(self, service, mock_gateway, frame_media, good_result):
        """정상 요청은 gateway를 정확히 1번 호출"""
        result = await service.analyze(frame_media, "squat")

        assert result == good_result
        mock_gateway.analyze.assert_awaited_once()

        sent: AnalysisRequest = mock_gateway.analyze.await_args.args[0]
        assert sent.media == frame_media
        assert sent.activity is Activity.squat
        assert sent.mode is MediaMode.frame

    @pytest.mark.asyncio
    async def test_analyze_clip(self, service, mock_gateway, clip_media):
        await service.analyze(clip_media, "desk_sitting", "clip")

        sent = mock_gateway.analyze.await_args.args[0]
        assert sent.mode is MediaMode.clip

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "media",
        [
            "data:text/plain;base64,AAAA",
            "data:video/webm;base64,AAAA",
            "https://example.com/frame.jpg",
            "",
        ],
    )
    async def test_bad_media_never_reaches_gateway(self, service, mock_gateway, media):
        """prefix 불일치 → ValidationError, gateway 호출 0회"""
        with pytest.raises(ValidationError):
            await service.analyze(media, "squat")

        assert mock_gateway.analyze.await_count == 0

    @pytest.mark.asyncio
    async def test_bad_activity_never_reaches_gateway(self, service, mock_gateway, frame_media):
        with pytest.raises(ValidationError) as exc:
            await service.analyze(frame_media, "pushup")

        assert exc.value.field == "activity"
        assert mock_gateway.analyze.await_count == 0

    @pytest.mark.asyncio
    async def test_inference_error_propagates(self, service, mock_gateway, frame_media):
        """provider 실패는 재시도 없이 그대로 전달"""
        mock_gateway.analyze.side_effect = InferenceError("provider unreachable")

        with pytest.raises(InferenceError):
            await service.analyze(frame_media, "squat")

        assert mock_gateway.analyze.await_count == 1

    @pytest.mark.asyncio
    async def test_analyze_request_revalidates(self, service, mock_gateway, frame_media):
        request = AnalysisRequest(media=frame_media, activity="squat")

        await service.analyze_request(request)

        assert mock_gateway.analyze.await_args.args[0] is request

    @pytest.mark.asyncio
    async def test_noop_gateway_end_to_end(self, frame_media):
        from app.services.service_factory import create_posture_analysis_service

        service = create_posture_analysis_service(llm_provider="noop")
        result = await service.analyze(frame_media, "desk_sitting")

        assert result.is_correct is True
        assert result.feedback
        assert service.provider == "noop"


class TestServiceFactory:
    """service_factory 테스트"""

    def test_default_provider_is_noop(self):
        from app.services.service_factory import create_inference_gateway

        assert isinstance(create_inference_gateway(), NoopInferenceClient)

    def test_unknown_provider_rejected(self):
        from app.services.service_factory import create_inference_gateway

        with pytest.raises(ValueError):
            create_inference_gateway("anthropic")

    def test_openai_requires_api_key(self):
        from app.services.service_factory import create_inference_gateway

        with pytest.raises(ValueError):
            create_inference_gateway("openai")

    def test_openai_with_api_key(self):
        from app.services.service_factory import create_inference_gateway, settings

        with patch.object(settings, "OPENAI_API_KEY", "sk-test"):
            gateway = create_inference_gateway("openai", "gpt-4o")

        assert isinstance(gateway, OpenAIVisionClient)
        assert gateway.model == "gpt-4o"

    def test_gateway_provider(self):
        from app.services.service_factory import create_inference_gateway, settings

        with patch.object(settings, "LLM_GATEWAY_URL", "http://gw.test:3030/"):
            gateway = create_inference_gateway("gateway")

        assert isinstance(gateway, LLMGatewayClient)
        assert gateway.gateway_url == "http://gw.test:3030"
        assert gateway.timeout is None
        assert gateway.vendor == "gemini"
        assert gateway.model == "gemini-2.0-flash"

    def test_gateway_model_override(self):
        from app.services.service_factory import create_inference_gateway, settings

        with patch.object(settings, "LLM_GATEWAY_MODEL", "gemini-1.5-pro"):
            default = create_inference_gateway("gateway")
            explicit = create_inference_gateway("gateway", "gemini-2.5-flash")

        assert default.model == "gemini-1.5-pro"
        assert explicit.model == "gemini-2.5-flash"
