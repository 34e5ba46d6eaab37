import httpx
from typing import Optional
import logging

from app.common.errors import InferenceError
from app.infrastructure.llm.base import InferenceGateway, parse_reply
from app.infrastructure.llm.prompts import RESPONSE_JSON_SCHEMA, SYSTEM_PROMPT, build_instruction
from app.schemas.analysis_dto import AnalysisRequest, AnalysisResult, MediaMode

logger = logging.getLogger(__name__)


class LLMGatewayClient(InferenceGateway):
    """LLM Gateway와 통신하는 클라이언트 (POST /api/chat)"""

    provider = "gateway"

    def __init__(
        self,
        gateway_url: str,
        vendor: str = "gemini",
        model: str = "gemini-2.0-flash",
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            gateway_url: LLM Gateway 서버 URL (예: http://localhost:3030)
            vendor: Gateway 뒤의 실제 엔진 (gemini, openai 등)
            model: 모델명
            api_key: Gateway 내부 인증 키 (optional)
            timeout: 타임아웃(초). None이면 httpx 기본값
            transport: 테스트용 httpx transport 주입
        """
        self.gateway_url = gateway_url.rstrip("/")
        self.vendor = vendor.lower()
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

        logger.info(f"🚀 LLM Gateway Client: {self.vendor} / {model} @ {self.gateway_url}")

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        payload = self._build_payload(request)
        headers = {"X-API-Key": self.api_key} if self.api_key else {}

        client_kwargs = {"transport": self._transport}
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.post(
                    f"{self.gateway_url}/api/chat",
                    json=payload,
                    headers=headers,
                )
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"LLM Gateway Error: {e.response.status_code} - {e.response.text}")
            raise InferenceError(f"gateway returned HTTP {e.response.status_code}", cause=e) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"LLM Gateway Connection Failed: {e}")
            raise InferenceError("gateway request failed", cause=e) from e
        except ValueError as e:
            # response.json() 디코딩 실패
            logger.error(f"LLM Gateway returned non-JSON body: {e}")
            raise InferenceError("gateway returned a non-JSON body", cause=e) from e

        if not isinstance(data, dict) or "content" not in data:
            raise InferenceError("gateway reply has no 'content'")

        return parse_reply(data["content"])

    def _build_payload(self, request: AnalysisRequest) -> dict:
        media_part_type = "image_url" if request.mode is MediaMode.frame else "video_url"
        return {
            "provider": self.vendor,
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": build_instruction(request)},
                        {"type": media_part_type, media_part_type: {"url": request.media}},
                    ],
                },
            ],
            "response_format": {"type": "json_schema", "json_schema": RESPONSE_JSON_SCHEMA},
            "temperature": 0.2,
        }
