"""
core/discovery/caller.py - 원격 호출 드라이버

탐색 서비스의 모든 원격 호출은 RemoteCaller를 통과합니다.
호출마다 다음 순서를 지킵니다:

1. CancelToken 확인 (취소되었으면 DiscoveryCancelledError)
2. 서비스별 rate limiter 토큰 획득
3. 재시도 가능한 에러(throttling, 5xx, 네트워크)는 지수 백오프로 재시도

paginate()는 next_page가 없을 때까지 목록을 끝까지 읽으며,
중간 페이지 실패는 전체 목록 실패로 전파됩니다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from core.parallel import (
    CancelToken,
    ErrorCollector,
    RetryConfig,
    call_with_retry,
    get_rate_limiter,
    try_or_default,
)

from .client import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 페이지 수 상한 (next_page가 반복되는 비정상 응답 방지)
MAX_PAGES = 1000


class RemoteCaller:
    """취소/rate limit/재시도를 적용하는 원격 호출 래퍼

    Args:
        cancel_token: 실행 전체가 공유하는 취소 토큰
        collector: 허용 가능한 하위 호출 실패를 기록할 수집기
        retry_config: 호출 단위 재시도 설정 (None이면 기본값)
        rate_limit_timeout: rate limiter 최대 대기 시간 (None이면 limiter 기본값)
    """

    def __init__(
        self,
        cancel_token: CancelToken | None = None,
        collector: ErrorCollector | None = None,
        retry_config: RetryConfig | None = None,
        rate_limit_timeout: float | None = None,
    ):
        self.cancel_token = cancel_token or CancelToken()
        self.collector = collector or ErrorCollector()
        self.retry_config = retry_config
        self.rate_limit_timeout = rate_limit_timeout

    def call(self, service: str, label: str, func: Callable[[], T]) -> T:
        """단일 원격 호출 실행

        Args:
            service: rate limiter 서비스 이름 (identity, compute, network, ...)
            label: 로그/취소 식별용 호출 이름
            func: 인자 없는 원격 호출

        Returns:
            func 실행 결과
        """
        limiter = get_rate_limiter(service)

        def attempt() -> T:
            self.cancel_token.raise_if_cancelled(label)
            if not limiter.acquire(timeout=self.rate_limit_timeout):
                raise TimeoutError(f"rate limiter 대기 시간 초과 [{service}]")
            return func()

        return call_with_retry(attempt, self.retry_config, self.cancel_token, label)

    def paginate(self, service: str, label: str, fetch: Callable[[str | None], Page]) -> list[dict[str, Any]]:
        """페이지네이션 목록을 끝까지 읽기

        Args:
            service: rate limiter 서비스 이름
            label: 로그/취소 식별용 호출 이름
            fetch: page 토큰을 받아 Page를 반환하는 호출

        Returns:
            모든 페이지의 항목 (응답 순서 유지)

        Raises:
            RuntimeError: MAX_PAGES 페이지를 읽어도 목록이 끝나지 않은 경우
        """
        items: list[dict[str, Any]] = []
        page_token: str | None = None

        for page_count in range(1, MAX_PAGES + 1):
            token = page_token
            page = self.call(service, label, lambda: fetch(token))
            items.extend(page.items)

            if not page.next_page:
                logger.debug(f"[{label}] {len(items)}건 ({page_count} 페이지)")
                return items
            page_token = page.next_page

        raise RuntimeError(f"[{label}] 페이지 수 상한({MAX_PAGES}) 초과 - 목록이 끝나지 않음")

    def try_or_default(
        self,
        func: Callable[[], T],
        default: T,
        category: str,
        operation: str,
        resource_id: str | None = None,
    ) -> T:
        """실패해도 기본값으로 대체하는 하위 호출 (경고 수집)"""
        return try_or_default(
            func,
            default,
            collector=self.collector,
            category=category,
            operation=operation,
            resource_id=resource_id,
        )
