import logging

from app.infrastructure.llm.base import InferenceGateway, parse_reply
from app.schemas.analysis_dto import Activity, AnalysisRequest, AnalysisResult

logger = logging.getLogger(__name__)

_MOCK_FEEDBACK = {
    Activity.squat: "[테스트 모드 - NoOp LLM] Keep your chest up and push your knees out over your toes.",
    Activity.desk_sitting: "[테스트 모드 - NoOp LLM] Sit back in the chair and keep the screen at eye level.",
}


class NoopInferenceClient(InferenceGateway):
    """
    Noop 모드: 네트워크 호출 없이 고정 응답 반환 (테스트용, 과금 없음)

    실제 provider와 같은 파서를 거치도록 envelope 형태로 만들어 넘긴다.
    """

    provider = "noop"

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        logger.info("Noop 모드: Mock 응답 반환 (과금 없음)")
        return parse_reply(
            {
                "postureAnalysis": {
                    "isCorrect": True,
                    "feedback": _MOCK_FEEDBACK[request.activity],
                }
            }
        )
