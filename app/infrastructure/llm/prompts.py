"""
자세 분석 instruction 템플릿 + 구조화 출력 스키마
모든 provider가 같은 문구/스키마를 공유한다.
"""
from typing import Any, Dict

from app.schemas.analysis_dto import AnalysisRequest, MediaMode

SYSTEM_PROMPT = "You are an AI posture analysis expert."

_MEDIA_DESCRIPTION = {
    MediaMode.frame: "an image (a single frame from a video)",
    MediaMode.clip: "a short video clip",
}

_INSTRUCTION_TEMPLATE = """You are an AI posture analysis expert. You will analyze the posture of a person in {media_description} and provide feedback on their form.

The media is provided as a data URI. The type of posture to analyze is {activity}.

Analyze the media and determine if the posture is correct. If not, provide specific feedback on how to correct it.

Output the analysis in the following JSON format:
{{
  "postureAnalysis": {{
    "isCorrect": true/false,
    "feedback": "Detailed feedback on the posture."
  }}
}}
"""

# OpenAI response_format / gateway response_schema 공용
RESPONSE_JSON_SCHEMA: Dict[str, Any] = {
    "name": "posture_analysis",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "postureAnalysis": {
                "type": "object",
                "properties": {
                    "isCorrect": {
                        "type": "boolean",
                        "description": "Whether or not the posture is correct.",
                    },
                    "feedback": {
                        "type": "string",
                        "description": "Feedback on the posture, including corrections if needed.",
                    },
                },
                "required": ["isCorrect", "feedback"],
                "additionalProperties": False,
            }
        },
        "required": ["postureAnalysis"],
        "additionalProperties": False,
    },
}


def build_instruction(request: AnalysisRequest) -> str:
    """activity 값을 삽입한 고정 instruction 생성"""
    return _INSTRUCTION_TEMPLATE.format(
        media_description=_MEDIA_DESCRIPTION[request.mode],
        activity=request.activity.value,
    )
