import asyncio
import logging
from typing import List, Optional

from app.common.errors import InferenceError
from app.infrastructure.llm.base import InferenceGateway, parse_reply
from app.infrastructure.llm.openai_runtime import get_openai_adapter
from app.infrastructure.llm.prompts import RESPONSE_JSON_SCHEMA, SYSTEM_PROMPT, build_instruction
from app.schemas.analysis_dto import AnalysisRequest, AnalysisResult, MediaMode
from app.utils.types.types import Message

logger = logging.getLogger(__name__)


class OpenAIVisionClient(InferenceGateway):
    """
    OpenAI Chat Completions (vision + json_schema 구조화 출력)

    - 이미지(frame)만 지원. chat API는 video data URI를 받지 않으므로 clip은 InferenceError
    - SDK 호출은 동기 → 스레드로 넘겨 이벤트 루프를 막지 않음
    """

    provider = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: Optional[float] = None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        logger.info(f"🚀 LLM Client: openai / {model}")

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        if request.mode is not MediaMode.frame:
            raise InferenceError("openai provider accepts image frames only")

        messages: List[Message] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": build_instruction(request)},
                    {"type": "image_url", "image_url": {"url": request.media}},
                ],
            },
        ]

        try:
            adapter = get_openai_adapter(self.api_key)
            text = await asyncio.to_thread(
                adapter.chat,
                model=self.model,
                messages=messages,
                temperature=0.2,
                timeout=self.timeout,
                response_format={"type": "json_schema", "json_schema": RESPONSE_JSON_SCHEMA},
            )
        except Exception as e:
            # SDK 예외(APIConnectionError, RateLimitError, APITimeoutError ...) 전부 한 경계에서 변환
            logger.error(f"❌ OpenAI call failed: {type(e).__name__}: {e}")
            raise InferenceError(f"openai request failed: {type(e).__name__}", cause=e) from e

        return parse_reply(text)
