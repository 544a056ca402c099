"""
core/parallel/executor.py - Fan-out 병렬 실행기

서로 독립적인 작업들을 fork-join 패턴으로 병렬 실행합니다.
ThreadPoolExecutor 기반이며, 작업별 실패 정책(FATAL/TOLERABLE)에 따라
첫 치명적 실패 시 나머지 작업을 협력적으로 취소합니다.

주요 구성 요소:
- ParallelConfig: 병렬 실행 설정 (워커 수)
- ParallelTask: 실행할 작업 명세 (식별자, 함수, 실패 정책)
- FanOutExecutor: fork-join 실행기
- fan_out: 간편한 실행 래퍼 함수

작업 함수는 CancelToken을 인자로 받아 원격 호출 직전에 확인해야 합니다.
결과는 작업별 TaskResult로 반환되며, 공유 상태 없이 호출 스레드에서 통합합니다.

Example:
    tasks = [
        ParallelTask("shapes", lambda token: list_shapes(token), FailurePolicy.FATAL),
        ParallelTask("vcns", lambda token: list_vcns(token), FailurePolicy.TOLERABLE),
    ]
    result = fan_out(tasks)
    if result.aborted:
        raise result.aborted_by.error.original_exception
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from core.exceptions import DiscoveryCancelledError

from .cancel import CancelToken
from .decorators import categorize_error, get_error_code
from .types import ErrorCategory, FailurePolicy, ParallelExecutionResult, TaskError, TaskResult, TaskState

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


class ProgressTracker(Protocol):
    """진행 상황 추적기 인터페이스"""

    def set_total(self, total: int) -> None: ...

    def on_complete(self, identifier: str, success: bool) -> None: ...


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~100, None이면 작업 수만큼)
    """

    max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.max_workers is None:
            return
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > 100:
            self.max_workers = 100


@dataclass
class ParallelTask(Generic[T]):
    """실행할 작업 명세

    Attributes:
        identifier: 작업 식별자 (탐색 카테고리 이름)
        func: (CancelToken) -> T 작업 함수
        policy: 실패 정책
    """

    identifier: str
    func: Callable[[CancelToken], T]
    policy: FailurePolicy = FailurePolicy.FATAL


class FanOutExecutor:
    """Fork-join 병렬 실행기

    특징:
    - 모든 작업을 동시에 제출하고 완료 순서대로 결과 수집
    - 첫 FATAL 실패 시 CancelToken 설정 + 대기 중인 future 취소
    - with 블록 종료 시 모든 워커 스레드 join (실행 중인 작업이 남지 않음)
    - 작업 결과는 TaskResult로만 전달 (공유 가변 상태 없음)
    """

    def __init__(self, config: ParallelConfig | None = None):
        self.config = config or ParallelConfig()

    def execute(
        self,
        tasks: Sequence[ParallelTask[Any]],
        cancel_token: CancelToken | None = None,
        progress_tracker: ProgressTracker | None = None,
    ) -> ParallelExecutionResult[Any]:
        """작업 목록을 병렬 실행

        Args:
            tasks: 실행할 작업 목록
            cancel_token: 취소 토큰 (None이면 새로 생성)
            progress_tracker: 진행 상황 추적기 (선택사항)

        Returns:
            ParallelExecutionResult: 전체 실행 결과
        """
        if not tasks:
            logger.warning("실행할 작업이 없습니다")
            return ParallelExecutionResult()

        token = cancel_token or CancelToken()
        max_workers = self.config.max_workers or len(tasks)

        logger.info(f"병렬 실행 시작: {len(tasks)}개 작업, max_workers={max_workers}")
        if progress_tracker:
            progress_tracker.set_total(len(tasks))

        results: list[TaskResult[Any]] = []
        aborted_by: TaskResult[Any] | None = None
        start_time = time.monotonic()

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="discovery") as executor:
            futures: dict[Future[TaskResult[Any]], ParallelTask[Any]] = {
                executor.submit(self._execute_single, task, token): task for task in tasks
            }

            for future in as_completed(futures):
                task = futures[future]
                try:
                    result = future.result()
                except CancelledError:
                    result = TaskResult(identifier=task.identifier, state=TaskState.CANCELLED)

                results.append(result)
                if progress_tracker:
                    progress_tracker.on_complete(result.identifier, result.success)

                if result.is_fatal and aborted_by is None:
                    aborted_by = result
                    if token.cancel(reason=task.identifier):
                        logger.error(f"치명적 실패 [{task.identifier}] - 나머지 작업 취소")
                    # 실행 전인 future만 취소됨, 워커가 꺼낼 때 as_completed에 통지
                    for pending in futures:
                        pending.cancel()

        total_time = (time.monotonic() - start_time) * 1000
        exec_result = ParallelExecutionResult(results=tuple(results), aborted_by=aborted_by)

        logger.info(
            f"병렬 실행 완료: 성공 {exec_result.success_count}, 실패 {exec_result.error_count}, "
            f"취소 {exec_result.cancelled_count}, 총 {total_time:.0f}ms"
        )

        return exec_result

    def _execute_single(self, task: ParallelTask[T], token: CancelToken) -> TaskResult[T]:
        """단일 작업 실행 (워커 스레드 내에서 호출)

        작업 함수의 예외는 실패 정책에 따라 FAILED_FATAL 또는 FAILED_TOLERABLE로,
        취소 예외는 CANCELLED로 변환합니다.
        """
        start_time = time.monotonic()

        if token.cancelled:
            return TaskResult(identifier=task.identifier, state=TaskState.CANCELLED)

        logger.debug(f"작업 시작: {task.identifier}")
        try:
            data = task.func(token)
            return TaskResult(
                identifier=task.identifier,
                state=TaskState.SUCCEEDED,
                data=data,
                duration_ms=(time.monotonic() - start_time) * 1000,
            )

        except DiscoveryCancelledError as e:
            logger.debug(f"작업 취소: {task.identifier}")
            return TaskResult(
                identifier=task.identifier,
                state=TaskState.CANCELLED,
                error=TaskError(
                    identifier=task.identifier,
                    category=ErrorCategory.UNKNOWN,
                    error_code="Cancelled",
                    message=str(e),
                ),
                duration_ms=(time.monotonic() - start_time) * 1000,
            )

        except Exception as e:
            _clear_exception_chain(e)
            state = TaskState.FAILED_FATAL if task.policy == FailurePolicy.FATAL else TaskState.FAILED_TOLERABLE
            return TaskResult(
                identifier=task.identifier,
                state=state,
                error=TaskError(
                    identifier=task.identifier,
                    category=categorize_error(e),
                    error_code=get_error_code(e),
                    message=str(e),
                    original_exception=e,
                ),
                duration_ms=(time.monotonic() - start_time) * 1000,
            )


def fan_out(
    tasks: Sequence[ParallelTask[Any]],
    max_workers: int | None = None,
    cancel_token: CancelToken | None = None,
    progress_tracker: ProgressTracker | None = None,
) -> ParallelExecutionResult[Any]:
    """병렬 실행 편의 함수

    Args:
        tasks: 실행할 작업 목록
        max_workers: 최대 동시 스레드 수 (None이면 작업 수만큼)
        cancel_token: 취소 토큰 (선택사항)
        progress_tracker: 진행 상황 추적기 (선택사항)

    Returns:
        ParallelExecutionResult
    """
    executor = FanOutExecutor(ParallelConfig(max_workers=max_workers))
    return executor.execute(tasks, cancel_token=cancel_token, progress_tracker=progress_tracker)
