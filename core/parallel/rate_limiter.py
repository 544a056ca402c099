"""
core/parallel/rate_limiter.py - Token Bucket Rate Limiter

OCI API 쓰로틀링(429 TooManyRequests)을 예방하기 위한 서비스별 rate limiter입니다.
여러 탐색 작업이 같은 서비스를 동시에 호출하므로 스레드 세이프하게 동작합니다.

Example:
    limiter = get_rate_limiter("compute")
    if limiter.acquire():
        response = client.list_shapes(compartment_id)
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RateLimiterConfig:
    """Rate limiter 설정

    Attributes:
        requests_per_second: 초당 토큰 리필 속도
        burst_size: 버킷 최대 토큰 수
        wait_timeout: acquire() 최대 대기 시간 (초)
    """

    requests_per_second: float = 10.0
    burst_size: int = 20
    wait_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be > 0, got {self.requests_per_second}")
        if self.burst_size < 1:
            raise ValueError(f"burst_size must be >= 1, got {self.burst_size}")


# 서비스별 설정 (OCI 서비스 한도 기준 보수적으로 설정)
SERVICE_RATE_LIMITS: dict[str, RateLimiterConfig] = {
    "identity": RateLimiterConfig(requests_per_second=10, burst_size=20),
    "compute": RateLimiterConfig(requests_per_second=20, burst_size=40),
    "network": RateLimiterConfig(requests_per_second=20, burst_size=40),
    "blockstorage": RateLimiterConfig(requests_per_second=20, burst_size=40),
    "limits": RateLimiterConfig(requests_per_second=5, burst_size=10),
    "default": RateLimiterConfig(requests_per_second=10, burst_size=20),
}


class TokenBucketRateLimiter:
    """Token Bucket 알고리즘 기반 rate limiter

    버킷은 burst_size까지 토큰을 보유하고, 초당 requests_per_second개씩 리필됩니다.
    """

    def __init__(self, config: RateLimiterConfig | None = None):
        self.config = config or RateLimiterConfig()
        self._tokens = float(self.config.burst_size)
        self._last_refill = time.monotonic()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        """경과 시간만큼 토큰 리필 (lock 보유 상태에서 호출)"""
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(
            float(self.config.burst_size),
            self._tokens + elapsed * self.config.requests_per_second,
        )
        self._last_refill = now

    @property
    def available_tokens(self) -> float:
        """현재 사용 가능한 토큰 수"""
        with self._lock:
            self._refill()
            return self._tokens

    def try_acquire(self, tokens: int = 1) -> bool:
        """대기 없이 토큰 획득 시도

        Args:
            tokens: 획득할 토큰 수

        Returns:
            획득 성공 여부
        """
        with self._lock:
            self._refill()
            if self._tokens >= tokens:
                self._tokens -= tokens
                return True
            return False

    def acquire(self, tokens: int = 1, timeout: float | None = None) -> bool:
        """토큰 획득 (필요 시 대기)

        Args:
            tokens: 획득할 토큰 수
            timeout: 최대 대기 시간 (None이면 config.wait_timeout)

        Returns:
            획득 성공 여부 (타임아웃 시 False)
        """
        deadline = time.monotonic() + (self.config.wait_timeout if timeout is None else timeout)

        while True:
            with self._lock:
                self._refill()
                if self._tokens >= tokens:
                    self._tokens -= tokens
                    return True
                wait = (tokens - self._tokens) / self.config.requests_per_second

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug("Rate limiter 대기 시간 초과")
                return False
            time.sleep(min(wait, remaining))


_limiters: dict[str, TokenBucketRateLimiter] = {}
_limiters_lock = threading.Lock()


def get_rate_limiter(service: str) -> TokenBucketRateLimiter:
    """서비스별 rate limiter 싱글톤 반환

    Args:
        service: OCI 서비스 이름 (identity, compute, network, blockstorage, limits)

    Returns:
        서비스 전용 TokenBucketRateLimiter
    """
    with _limiters_lock:
        limiter = _limiters.get(service)
        if limiter is None:
            config = SERVICE_RATE_LIMITS.get(service, SERVICE_RATE_LIMITS["default"])
            limiter = TokenBucketRateLimiter(config)
            _limiters[service] = limiter
        return limiter


def reset_rate_limiters() -> None:
    """모든 rate limiter 초기화 (테스트용)"""
    with _limiters_lock:
        _limiters.clear()
