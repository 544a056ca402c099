"""
core/parallel/types.py - 병렬 실행 결과 타입

Fan-out 실행기의 작업 상태, 실패 정책, 작업 결과를 정의합니다.

주요 구성 요소:
- ErrorCategory: 에러 분류 (재시도 여부 판단용)
- FailurePolicy: 카테고리별 실패 정책 (FATAL / TOLERABLE)
- TaskState: 작업 상태 머신
- TaskError / TaskResult: 작업 단위 결과
- ParallelExecutionResult: 전체 실행 결과
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """에러 카테고리"""

    THROTTLING = "throttling"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    TIMEOUT = "timeout"
    EXPIRED_TOKEN = "expired_token"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    UNKNOWN = "unknown"


class FailurePolicy(Enum):
    """작업 실패 시 처리 정책

    FATAL: 첫 실패가 실행 전체를 중단하고 나머지 작업을 취소
    TOLERABLE: 경고로 기록하고 실행을 계속 진행
    """

    FATAL = "fatal"
    TOLERABLE = "tolerable"


class TaskState(Enum):
    """작업 상태

    pending → running → {succeeded, failed_fatal, failed_tolerable, cancelled}
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED_FATAL = "failed_fatal"
    FAILED_TOLERABLE = "failed_tolerable"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self not in (TaskState.PENDING, TaskState.RUNNING)


@dataclass
class TaskError:
    """작업 실패 정보

    Attributes:
        identifier: 작업 식별자 (탐색 카테고리 이름)
        category: 에러 분류
        error_code: 에러 코드 (ServiceError.code 또는 예외 클래스명)
        message: 에러 메시지
        retries: 재시도 횟수
        original_exception: 원본 예외
    """

    identifier: str
    category: ErrorCategory
    error_code: str
    message: str
    retries: int = 0
    timestamp: datetime = field(default_factory=datetime.now)
    original_exception: Exception | None = None

    def is_retryable(self) -> bool:
        """재시도 가능한 에러인지 확인"""
        return self.category in (
            ErrorCategory.THROTTLING,
            ErrorCategory.NETWORK,
            ErrorCategory.TIMEOUT,
            ErrorCategory.SERVICE_ERROR,
        )

    def __str__(self) -> str:
        return f"[{self.identifier}] {self.error_code}: {self.message}"


@dataclass
class TaskResult(Generic[T]):
    """단일 작업 결과

    Attributes:
        identifier: 작업 식별자
        state: 종료 상태
        data: 성공 시 결과 데이터
        error: 실패 시 에러 정보
        duration_ms: 실행 시간 (밀리초)
    """

    identifier: str
    state: TaskState
    data: T | None = None
    error: TaskError | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.state == TaskState.SUCCEEDED

    @property
    def is_fatal(self) -> bool:
        return self.state == TaskState.FAILED_FATAL


@dataclass
class ParallelExecutionResult(Generic[T]):
    """전체 실행 결과

    Attributes:
        results: 작업별 결과 (완료 순서)
        aborted_by: 실행을 중단시킨 첫 치명적 실패 (없으면 None)
    """

    results: tuple[TaskResult[T], ...] = ()
    aborted_by: TaskResult[T] | None = None

    @property
    def aborted(self) -> bool:
        return self.aborted_by is not None

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if r.error is not None and r.state != TaskState.CANCELLED)

    @property
    def cancelled_count(self) -> int:
        return sum(1 for r in self.results if r.state == TaskState.CANCELLED)

