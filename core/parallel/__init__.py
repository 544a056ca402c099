"""
core/parallel - 병렬 처리 모듈

독립적인 OCI 탐색 작업을 병렬로 안전하게 처리합니다.

주요 구성 요소:
- FanOutExecutor: fork-join 병렬 실행기 (첫 치명적 실패 시 취소)
- fan_out: 간편한 병렬 실행 함수
- CancelToken: 협력적 취소 신호
- TokenBucketRateLimiter: API 쓰로틀링 방지
- call_with_retry: 원격 호출 단위 지수 백오프 재시도

Example:
    from core.parallel import FailurePolicy, ParallelTask, fan_out

    tasks = [
        ParallelTask("shapes", discover_shapes_task, FailurePolicy.FATAL),
        ParallelTask("vcns", discover_vcns_task, FailurePolicy.TOLERABLE),
    ]
    result = fan_out(tasks)

    print(f"성공: {result.success_count}, 실패: {result.error_count}")
    if result.aborted:
        print(result.aborted_by.error)
"""

from .cancel import CancelToken
from .decorators import RetryConfig, call_with_retry, categorize_error, get_error_code, is_retryable
from .errors import CollectedError, ErrorCollector, try_or_default
from .executor import FanOutExecutor, ParallelConfig, ParallelTask, fan_out
from .rate_limiter import (
    RateLimiterConfig,
    TokenBucketRateLimiter,
    get_rate_limiter,
    reset_rate_limiters,
)
from .types import ErrorCategory, FailurePolicy, ParallelExecutionResult, TaskError, TaskResult, TaskState

__all__: list[str] = [
    # Executor
    "FanOutExecutor",
    "ParallelConfig",
    "ParallelTask",
    "fan_out",
    # Cancellation
    "CancelToken",
    # Retry
    "RetryConfig",
    "call_with_retry",
    "categorize_error",
    "get_error_code",
    "is_retryable",
    # Error handling
    "ErrorCollector",
    "CollectedError",
    "try_or_default",
    # Rate Limiter
    "TokenBucketRateLimiter",
    "RateLimiterConfig",
    "get_rate_limiter",
    "reset_rate_limiters",
    # Types
    "ErrorCategory",
    "FailurePolicy",
    "TaskState",
    "TaskError",
    "TaskResult",
    "ParallelExecutionResult",
]
