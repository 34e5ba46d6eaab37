# tests/unit/test_reply_parser.py
import json

import pytest

from app.common.errors import InferenceError
from app.infrastructure.llm.base import parse_reply
from app.schemas.analysis_dto import AnalysisResult


def test_parses_wrapped_reply_unchanged():
    raw = '{"postureAnalysis":{"isCorrect":true,"feedback":"Good form."}}'

    result = parse_reply(raw)

    assert result == AnalysisResult(is_correct=True, feedback="Good form.")
    assert result.model_dump(by_alias=True) == {"isCorrect": True, "feedback": "Good form."}


def test_parses_dict_and_bytes():
    body = {"postureAnalysis": {"isCorrect": False, "feedback": "Straighten your back."}}

    assert parse_reply(body).is_correct is False
    assert parse_reply(json.dumps(body).encode()).feedback == "Straighten your back."


def test_tolerates_markdown_fence():
    raw = '```json\n{"postureAnalysis": {"isCorrect": false, "feedback": "Knees in."}}\n```'

    assert parse_reply(raw).feedback == "Knees in."


@pytest.mark.parametrize(
    "raw",
    [
        '{"postureAnalysis":{"isCorrect":true}}',  # feedback 누락
        '{"postureAnalysis":{"feedback":"ok"}}',  # isCorrect 누락
        '{"isCorrect":true,"feedback":"flat"}',  # envelope 없음
        '{"postureAnalysis":{"isCorrect":"yes","feedback":"ok"}}',  # bool 아님
        '{"postureAnalysis":{"isCorrect":true,"feedback":42}}',  # str 아님
        '{"postureAnalysis":null}',
        "not json at all",
        "",
        "[]",
    ],
)
def test_malformed_reply_raises_inference_error(raw):
    with pytest.raises(InferenceError):
        parse_reply(raw)
