import logging
from typing import Union

from app.common.errors import ValidationError
from app.domain.media.encoder import BASE64_MARKER
from app.schemas.analysis_dto import Activity, AnalysisRequest, MediaMode

logger = logging.getLogger(__name__)


class RequestValidator:
    """
    provider 호출 전 요청 검증기

    책임:
    - media가 모드에 맞는 data URI prefix를 갖는지 확인
    - activity가 squat / desk_sitting 중 하나인지 확인
    - 실패 시 ValidationError(field) → 네트워크 비용 없이 즉시 차단
    """

    def validate(
        self,
        media: str,
        activity: Union[str, Activity],
        mode: Union[str, MediaMode] = MediaMode.frame,
    ) -> AnalysisRequest:
        mode = self.parse_mode(mode)
        self._check_media(media, mode)
        parsed_activity = self.parse_activity(activity)

        return AnalysisRequest(media=media, activity=parsed_activity, mode=mode)

    def validate_request(self, request: AnalysisRequest) -> AnalysisRequest:
        """이미 만들어진 요청 재검증. 통과하면 같은 객체를 그대로 반환"""
        self.validate(request.media, request.activity, request.mode)
        return request

    @staticmethod
    def parse_mode(mode: Union[str, MediaMode]) -> MediaMode:
        try:
            return MediaMode(mode)
        except ValueError:
            raise ValidationError("mode", f"mode must be one of {[m.value for m in MediaMode]}")

    @staticmethod
    def parse_activity(activity: Union[str, Activity]) -> Activity:
        try:
            return Activity(activity)
        except ValueError:
            logger.warning(f"⚠️ Invalid activity rejected: {activity!r}")
            raise ValidationError(
                "activity", f"activity must be one of {[a.value for a in Activity]}"
            )

    @staticmethod
    def _check_media(media: str, mode: MediaMode) -> None:
        prefix = mode.data_uri_prefix
        if not isinstance(media, str) or not media.startswith(prefix):
            logger.warning(f"⚠️ Media rejected: expected prefix {prefix!r}")
            raise ValidationError("media", f"media must be a data URI starting with '{prefix}'")

        header, sep, payload = media.partition(BASE64_MARKER)
        if not sep or header == prefix:
            raise ValidationError("media", "media must carry a MIME type and base64 payload")
        if not payload:
            raise ValidationError("media", "media payload is empty")
