"""
자세 분석 세션 (카메라/녹화 화면 상태 관리)

- 주기 캡처: interval마다 tick 발생, 요청 진행 중이면 tick은 버린다 (큐잉/병렬 X)
- 수동 분석(클립): 요청 진행 중이면 AnalysisInProgressError로 거부
- 최근 결과 1건(last_view)만 유지
- 어떤 실패도 세션을 멈추지 않는다: 예외 → AnalysisView 로 변환
"""
import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Set, Tuple, Union

from app.common.errors import PostureAnalysisError
from app.config.settings import settings
from app.domain.media.encoder import encode_data_uri
from app.domain.validation.validator import RequestValidator
from app.schemas.analysis_dto import Activity, MediaMode
from app.services.posture_analysis_service import PostureAnalysisService
from app.services.result_view import AnalysisView, render_error, render_result
from app.utils.concurrency import InFlightGuard
from app.utils.enums.enums import AnalyzerState

logger = logging.getLogger(__name__)

# (bytes, mime_type). 프레임이 아직 없으면 None (예: 카메라 준비 전)
Frame = Optional[Tuple[bytes, str]]
FrameSource = Callable[[], Union[Frame, Awaitable[Frame]]]


class PostureAnalyzerSession:
    def __init__(
        self,
        service: PostureAnalysisService,
        activity: Union[str, Activity] = Activity.squat,
        interval: Optional[float] = None,
    ):
        self.service = service
        self.activity = RequestValidator.parse_activity(activity)
        self.interval = interval if interval is not None else settings.CAPTURE_INTERVAL_SECONDS

        self.state = AnalyzerState.idle
        self.last_view: Optional[AnalysisView] = None

        self._guard = InFlightGuard()
        self._capture_task: Optional[asyncio.Task] = None
        self._tick_tasks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> bool:
        return self._guard.busy

    @property
    def is_capturing(self) -> bool:
        return self._capture_task is not None and not self._capture_task.done()

    # ========== Activity ==========
    def set_activity(self, activity: Union[str, Activity]) -> None:
        """activity 변경 시 이전 결과/에러 초기화"""
        self.activity = RequestValidator.parse_activity(activity)
        self.last_view = None

    # ========== 주기 캡처 (frame mode) ==========
    async def tick(self, frame_source: FrameSource) -> Optional[AnalysisView]:
        """
        프레임 1장 캡처 후 분석

        Returns:
            AnalysisView, 또는 tick이 버려졌거나 프레임이 없으면 None
        """
        if self._guard.busy:
            logger.debug("⏭️ 분석 진행 중: tick drop")
            return None

        with self._guard.slot():
            try:
                frame = frame_source()
                if inspect.isawaitable(frame):
                    frame = await frame
            except Exception as e:
                logger.error(f"❌ 프레임 캡처 실패: {e}", exc_info=True)
                return self._show(render_error(e))

            if frame is None:
                return None

            return await self._dispatch(frame, MediaMode.frame)

    def start_capture(self, frame_source: FrameSource) -> None:
        """즉시 1회 분석 후 interval마다 tick"""
        if self.is_capturing:
            return
        self.state = AnalyzerState.capturing
        self._capture_task = asyncio.create_task(self._capture_loop(frame_source))
        logger.info(f"📷 주기 캡처 시작: every {self.interval}s, activity={self.activity.value}")

    async def stop_capture(self) -> None:
        """새 tick 발행만 멈춘다. 이미 보낸 요청은 취소하지 않음"""
        task, self._capture_task = self._capture_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            logger.info("📷 주기 캡처 중지")
        if not self.in_flight:
            self.state = AnalyzerState.idle

    async def drain(self) -> None:
        """진행 중인 tick 완료 대기 (종료/테스트용)"""
        if self._tick_tasks:
            await asyncio.gather(*list(self._tick_tasks))

    async def _capture_loop(self, frame_source: FrameSource) -> None:
        while True:
            task = asyncio.create_task(self.tick(frame_source))
            self._tick_tasks.add(task)
            task.add_done_callback(self._tick_tasks.discard)
            await asyncio.sleep(self.interval)

    # ========== 녹화 / 업로드 (clip mode) ==========
    async def begin_recording(self) -> None:
        await self.stop_capture()
        self.state = AnalyzerState.recording
        logger.info("⏺️ 녹화 시작")

    async def finish_recording(self, data: bytes, mime_type: str) -> AnalysisView:
        if self.state is not AnalyzerState.recording:
            raise RuntimeError("recording was not started")
        self.state = AnalyzerState.idle
        logger.info(f"⏹️ 녹화 종료: {len(data)} bytes ({mime_type})")
        return await self.analyze_clip(data, mime_type)

    async def analyze_clip(self, data: bytes, mime_type: str) -> AnalysisView:
        """수동 분석. 진행 중인 요청이 있으면 AnalysisInProgressError"""
        with self._guard.slot():
            return await self._dispatch((data, mime_type), MediaMode.clip)

    # ========== 내부 ==========
    async def _dispatch(self, frame: Tuple[bytes, str], mode: MediaMode) -> AnalysisView:
        self.state = AnalyzerState.analyzing
        try:
            media = encode_data_uri(*frame)
            result = await self.service.analyze(media, self.activity, mode)
            view = render_result(result)
        except PostureAnalysisError as e:
            logger.warning(f"⚠️ 분석 실패: {type(e).__name__}: {e}")
            view = render_error(e)
        except Exception as e:
            logger.error(f"❌ 예상치 못한 오류: {e}", exc_info=True)
            view = render_error(e)
        finally:
            # 대기 중 녹화 시작 등으로 바뀐 상태는 유지
            if self.state is AnalyzerState.analyzing:
                self.state = AnalyzerState.capturing if self.is_capturing else AnalyzerState.idle

        return self._show(view)

    def _show(self, view: AnalysisView) -> AnalysisView:
        self.last_view = view
        return view
