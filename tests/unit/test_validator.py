# tests/unit/test_validator.py
import pytest
from pydantic import ValidationError as PydanticValidationError

from app.common.errors import ValidationError
from app.domain.validation.validator import RequestValidator
from app.schemas.analysis_dto import Activity, AnalysisRequest, MediaMode


@pytest.fixture
def validator():
    return RequestValidator()


def test_valid_frame_request(validator, frame_media):
    request = validator.validate(frame_media, "squat")

    assert request.media == frame_media
    assert request.activity is Activity.squat
    assert request.mode is MediaMode.frame
    assert request.mime_type == "image/jpeg"


def test_valid_clip_request(validator, clip_media):
    request = validator.validate(clip_media, "desk_sitting", "clip")

    assert request.activity is Activity.desk_sitting
    assert request.mode is MediaMode.clip
    assert request.mime_type == "video/webm"


@pytest.mark.parametrize(
    "media, mode",
    [
        ("", "frame"),
        ("AAAA", "frame"),
        ("data:text/plain;base64,AAAA", "frame"),
        ("data:video/webm;base64,AAAA", "frame"),  # frame 모드에 video
        ("data:image/jpeg;base64,AAAA", "clip"),  # clip 모드에 image
        ("DATA:IMAGE/JPEG;base64,AAAA", "frame"),
        ("data:image/;base64,AAAA", "frame"),  # subtype 없음
        ("data:image/jpeg,AAAA", "frame"),  # base64 marker 없음
        ("data:image/jpeg;base64,", "frame"),  # payload 없음
    ],
)
def test_rejects_bad_media(validator, media, mode):
    with pytest.raises(ValidationError) as exc:
        validator.validate(media, "squat", mode)

    assert exc.value.field == "media"


@pytest.mark.parametrize("activity", ["", "Squat", "deadlift", "desk-sitting", "standing", None])
def test_rejects_unknown_activity(validator, frame_media, activity):
    with pytest.raises(ValidationError) as exc:
        validator.validate(frame_media, activity)

    assert exc.value.field == "activity"


def test_rejects_unknown_mode(validator, frame_media):
    with pytest.raises(ValidationError) as exc:
        validator.validate(frame_media, "squat", "audio")

    assert exc.value.field == "mode"


def test_validate_request_is_idempotent(validator, frame_media):
    request = validator.validate(frame_media, Activity.squat)
    snapshot = request.model_dump()

    again = validator.validate_request(request)

    assert again is request
    assert again.model_dump() == snapshot
    assert validator.validate(again.media, again.activity, again.mode) == request


def test_request_is_immutable(frame_media):
    request = AnalysisRequest(media=frame_media, activity="squat")

    with pytest.raises(PydanticValidationError):
        request.media = "data:image/png;base64,BBBB"


def test_error_to_dict_names_field():
    err = ValidationError("activity", "bad value")

    assert err.to_dict() == {"field": "activity", "message": "bad value"}
    assert "activity" in str(err)
