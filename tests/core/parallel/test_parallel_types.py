"""
tests/core/parallel/test_parallel_types.py - core/parallel/types.py 테스트
"""

from datetime import datetime

import pytest

from core.parallel.types import (
    ErrorCategory,
    FailurePolicy,
    ParallelExecutionResult,
    TaskError,
    TaskResult,
    TaskState,
)


class TestErrorCategory:
    """ErrorCategory 열거형 테스트"""

    def test_all_categories_exist(self):
        """모든 에러 카테고리가 정의되어 있는지 확인"""
        assert ErrorCategory.THROTTLING.value == "throttling"
        assert ErrorCategory.ACCESS_DENIED.value == "access_denied"
        assert ErrorCategory.NOT_FOUND.value == "not_found"
        assert ErrorCategory.NETWORK.value == "network"
        assert ErrorCategory.TIMEOUT.value == "timeout"
        assert ErrorCategory.EXPIRED_TOKEN.value == "expired_token"
        assert ErrorCategory.UNKNOWN.value == "unknown"

    def test_category_count(self):
        """카테고리 개수 확인"""
        assert len(ErrorCategory) == 9


class TestTaskState:
    """TaskState 테스트"""

    def test_terminal_states(self):
        """종료 상태 판별"""
        assert TaskState.PENDING.is_terminal is False
        assert TaskState.RUNNING.is_terminal is False
        assert TaskState.SUCCEEDED.is_terminal is True
        assert TaskState.FAILED_FATAL.is_terminal is True
        assert TaskState.FAILED_TOLERABLE.is_terminal is True
        assert TaskState.CANCELLED.is_terminal is True

    def test_failure_policy_values(self):
        """실패 정책 값"""
        assert FailurePolicy.FATAL.value == "fatal"
        assert FailurePolicy.TOLERABLE.value == "tolerable"


class TestTaskError:
    """TaskError 데이터 클래스 테스트"""

    def test_create_task_error(self):
        """TaskError 생성 테스트"""
        error = TaskError(
            identifier="vcns",
            category=ErrorCategory.ACCESS_DENIED,
            error_code="NotAuthorizedOrNotFound",
            message="Authorization failed",
        )

        assert error.identifier == "vcns"
        assert error.retries == 0
        assert error.original_exception is None
        assert isinstance(error.timestamp, datetime)

    @pytest.mark.parametrize(
        "category",
        [ErrorCategory.THROTTLING, ErrorCategory.NETWORK, ErrorCategory.TIMEOUT, ErrorCategory.SERVICE_ERROR],
    )
    def test_is_retryable(self, category):
        """일시적 에러는 재시도 가능"""
        assert TaskError("shapes", category, "X", "msg").is_retryable() is True

    @pytest.mark.parametrize("category", [ErrorCategory.ACCESS_DENIED, ErrorCategory.NOT_FOUND])
    def test_is_not_retryable(self, category):
        """권한/리소스 없음은 재시도 불가"""
        assert TaskError("shapes", category, "X", "msg").is_retryable() is False

    def test_str_representation(self):
        """문자열 표현"""
        error = TaskError("vcns", ErrorCategory.ACCESS_DENIED, "NotAuthorizedOrNotFound", "denied")
        assert str(error) == "[vcns] NotAuthorizedOrNotFound: denied"


class TestTaskResult:
    """TaskResult 테스트"""

    def test_success(self):
        """성공 결과"""
        result = TaskResult("shapes", TaskState.SUCCEEDED, data=["A1"])

        assert result.success is True
        assert result.is_fatal is False

    def test_fatal(self):
        """치명적 실패 결과"""
        error = TaskError("tenancy", ErrorCategory.UNKNOWN, "RuntimeError", "boom")
        result = TaskResult("tenancy", TaskState.FAILED_FATAL, error=error)

        assert result.success is False
        assert result.is_fatal is True


class TestParallelExecutionResult:
    """ParallelExecutionResult 테스트"""

    @pytest.fixture
    def mixed_results(self):
        """성공/허용 실패/취소 혼합 결과"""
        return ParallelExecutionResult(
            results=(
                TaskResult("shapes", TaskState.SUCCEEDED, data=["A1"]),
                TaskResult(
                    "vcns",
                    TaskState.FAILED_TOLERABLE,
                    error=TaskError("vcns", ErrorCategory.ACCESS_DENIED, "NotAuthorizedOrNotFound", "denied"),
                ),
                TaskResult(
                    "limits",
                    TaskState.CANCELLED,
                    error=TaskError("limits", ErrorCategory.UNKNOWN, "Cancelled", "cancelled"),
                ),
            )
        )

    def test_empty_result(self):
        """빈 결과"""
        result = ParallelExecutionResult()

        assert result.aborted is False
        assert result.success_count == 0
        assert result.cancelled_count == 0

    def test_counts(self, mixed_results):
        """카운트 (취소는 에러에서 제외)"""
        assert mixed_results.success_count == 1
        assert mixed_results.error_count == 1
        assert mixed_results.cancelled_count == 1

    def test_aborted(self):
        """중단 여부"""
        fatal = TaskResult("tenancy", TaskState.FAILED_FATAL)
        result = ParallelExecutionResult(results=(fatal,), aborted_by=fatal)

        assert result.aborted is True
