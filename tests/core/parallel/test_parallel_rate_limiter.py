"""
tests/core/parallel/test_parallel_rate_limiter.py - core/parallel/rate_limiter.py 테스트
"""

import threading
import time
from unittest.mock import patch

import pytest

from core.parallel.rate_limiter import (
    SERVICE_RATE_LIMITS,
    RateLimiterConfig,
    TokenBucketRateLimiter,
    get_rate_limiter,
    reset_rate_limiters,
)


class FakeClock:
    """time.monotonic 대체 (수동 진행)"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    fake = FakeClock()
    with patch("core.parallel.rate_limiter.time.monotonic", fake), patch(
        "core.parallel.rate_limiter.time.sleep", side_effect=fake.sleep
    ) as sleep:
        fake.sleep_mock = sleep
        yield fake


class TestRateLimiterConfig:
    """RateLimiterConfig 테스트"""

    def test_defaults(self):
        """기본값"""
        config = RateLimiterConfig()

        assert (config.requests_per_second, config.burst_size, config.wait_timeout) == (10.0, 20, 30.0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"requests_per_second": 0},
            {"requests_per_second": -1.5},
            {"burst_size": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """0 이하 속도 또는 1 미만 버스트는 거부"""
        with pytest.raises(ValueError):
            RateLimiterConfig(**kwargs)


class TestTokenBucket:
    """TokenBucketRateLimiter 테스트"""

    def test_starts_full(self, clock):
        """버킷은 burst_size로 시작"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=1, burst_size=3))

        assert limiter.available_tokens == 3

    def test_try_acquire_drains_bucket(self, clock):
        """토큰 소진 후 try_acquire 실패"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=1, burst_size=2))

        assert limiter.try_acquire() is True
        assert limiter.try_acquire() is True
        assert limiter.try_acquire() is False

    def test_try_acquire_multiple_tokens(self, clock):
        """여러 토큰 동시 획득"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=1, burst_size=5))

        assert limiter.try_acquire(4) is True
        assert limiter.try_acquire(2) is False
        assert limiter.available_tokens == 1

    def test_refill_over_time(self, clock):
        """경과 시간 × 속도만큼 리필"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=4, burst_size=10))
        limiter.try_acquire(10)

        clock.now += 0.5

        assert limiter.available_tokens == pytest.approx(2.0)

    def test_refill_capped_at_burst(self, clock):
        """리필은 burst_size를 넘지 않음"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=100, burst_size=5))
        limiter.try_acquire(1)

        clock.now += 60

        assert limiter.available_tokens == 5

    def test_acquire_waits_for_refill(self, clock):
        """토큰이 없으면 필요한 만큼만 대기"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=2, burst_size=1))
        limiter.try_acquire()

        assert limiter.acquire() is True
        clock.sleep_mock.assert_called_once_with(pytest.approx(0.5))

    def test_acquire_timeout(self, clock):
        """대기 시간 초과 시 False"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=0.1, burst_size=1, wait_timeout=2.0))
        limiter.try_acquire()

        assert limiter.acquire() is False
        assert clock.now == pytest.approx(1002.0)

    def test_explicit_timeout_overrides_config(self, clock):
        """timeout 인자가 config.wait_timeout보다 우선"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=0.1, burst_size=1, wait_timeout=60.0))
        limiter.try_acquire()

        assert limiter.acquire(timeout=0.25) is False
        assert clock.now == pytest.approx(1000.25)

    def test_zero_timeout_does_not_sleep(self, clock):
        """timeout=0이면 대기 없이 실패"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=1, burst_size=1))
        limiter.try_acquire()

        assert limiter.acquire(timeout=0) is False
        clock.sleep_mock.assert_not_called()

    def test_concurrent_acquire_never_oversubscribes(self):
        """여러 스레드가 동시에 가져가도 burst_size를 넘지 않음"""
        limiter = TokenBucketRateLimiter(RateLimiterConfig(requests_per_second=0.001, burst_size=25))
        granted = []
        lock = threading.Lock()

        def worker():
            for _ in range(10):
                if limiter.try_acquire():
                    with lock:
                        granted.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(granted) == 25


class TestServiceRateLimits:
    """서비스별 설정 테스트"""

    @pytest.mark.parametrize("service", ["identity", "compute", "network", "blockstorage", "limits"])
    def test_discovery_services_configured(self, service):
        """탐색에서 사용하는 모든 서비스에 설정 존재"""
        assert service in SERVICE_RATE_LIMITS

    def test_limits_most_conservative(self):
        """limits 서비스가 가장 낮은 속도"""
        limits_rate = SERVICE_RATE_LIMITS["limits"].requests_per_second

        assert all(limits_rate <= c.requests_per_second for c in SERVICE_RATE_LIMITS.values())


class TestGetRateLimiter:
    """get_rate_limiter 테스트"""

    def test_singleton_per_service(self):
        """같은 서비스는 같은 인스턴스"""
        assert get_rate_limiter("compute") is get_rate_limiter("compute")
        assert get_rate_limiter("compute") is not get_rate_limiter("network")

    def test_service_config_applied(self):
        """서비스 설정 적용"""
        assert get_rate_limiter("limits").config is SERVICE_RATE_LIMITS["limits"]

    def test_unknown_service_uses_default(self):
        """미등록 서비스는 default 설정"""
        assert get_rate_limiter("objectstorage").config is SERVICE_RATE_LIMITS["default"]

    def test_concurrent_first_access(self):
        """동시 첫 접근에도 인스턴스는 하나"""
        seen = []
        barrier = threading.Barrier(6)

        def worker():
            barrier.wait()
            seen.append(get_rate_limiter("identity"))

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({id(limiter) for limiter in seen}) == 1

    def test_reset(self):
        """reset 후 새 인스턴스"""
        before = get_rate_limiter("compute")
        before.try_acquire(5)

        reset_rate_limiters()
        after = get_rate_limiter("compute")

        assert after is not before
        assert after.available_tokens == pytest.approx(after.config.burst_size)

    def test_real_clock_burst_is_immediate(self):
        """버스트 범위 안의 acquire는 대기하지 않음"""
        limiter = get_rate_limiter("network")
        start = time.monotonic()

        for _ in range(10):
            assert limiter.acquire() is True

        assert time.monotonic() - start < 0.5
