from contextlib import contextmanager

from app.common.errors import AnalysisInProgressError


class InFlightGuard:
    """
    분석 요청 동시 실행 상한 = 1 (세션 단위)

    단일 이벤트 루프에서만 사용하므로 lock 없이 flag 하나로 충분하다.
    flag는 dispatch 전에 세우고, 성공/실패/예외 모두 finally에서 내린다.
    """

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    @contextmanager
    def slot(self):
        if self._busy:
            raise AnalysisInProgressError()
        self._busy = True
        try:
            yield
        finally:
            self._busy = False
