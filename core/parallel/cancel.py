"""
core/parallel/cancel.py - 협력적 취소 토큰

Fan-out 실행 중 첫 치명적 실패가 발생하면 토큰이 한 번 설정되고,
실행 중인 작업은 다음 원격 호출 직전에 토큰을 확인하여 스스로 중단합니다.

Example:
    token = CancelToken()

    def task(token):
        for page in pages:
            token.raise_if_cancelled("shapes")
            ...
"""

from __future__ import annotations

import threading

from core.exceptions import DiscoveryCancelledError


class CancelToken:
    """스레드 세이프 취소 신호"""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason = ""

    def cancel(self, reason: str = "") -> bool:
        """취소 신호 설정

        Args:
            reason: 취소 사유 (로깅용)

        Returns:
            이번 호출이 처음으로 취소를 발생시켰으면 True
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            return True

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str:
        return self._reason

    def raise_if_cancelled(self, category: str) -> None:
        """취소되었으면 DiscoveryCancelledError 발생"""
        if self._event.is_set():
            raise DiscoveryCancelledError(category)

    def wait(self, timeout: float) -> bool:
        """취소되거나 timeout이 지날 때까지 대기

        재시도 백오프 대기 중에도 취소에 즉시 반응하기 위해 사용합니다.

        Returns:
            취소되었으면 True
        """
        return self._event.wait(timeout)
