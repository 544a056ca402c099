"""
core/parallel/errors.py - 에러 수집 및 관리

병렬 탐색 중 발생하는 허용 가능한(비치명적) 에러를 일관되게 수집합니다.
수집된 에러는 실행 종료 후 경고로 사용자에게 표시됩니다.

주요 구성 요소:
- CollectedError: 수집된 에러 상세 정보
- ErrorCollector: 스레드 세이프 에러 수집기
- try_or_default: 실패 시 기본값 반환 헬퍼

Example:
    collector = ErrorCollector()

    subnets = try_or_default(
        lambda: list_subnets(vcn),
        default=[],
        collector=collector,
        category="vcns",
        operation="list_subnets",
        resource_id=vcn_name,
    )

    for error in collector.errors:
        print(error)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar

from core.exceptions import DiscoveryCancelledError

from .decorators import categorize_error, get_error_code
from .types import ErrorCategory

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CollectedError:
    """수집된 에러 상세 정보

    Attributes:
        timestamp: 에러 발생 시각
        category: 탐색 카테고리 (예: "vcns", "images")
        operation: API 작업 이름 (예: "list_subnets")
        error_code: 에러 코드 (예: "NotAuthorizedOrNotFound")
        error_message: 에러 메시지
        error_category: 에러 분류 (ErrorCategory)
        resource_id: 관련 리소스 (VCN 이름, OS 계열 등, 선택사항)
    """

    timestamp: datetime
    category: str
    operation: str
    error_code: str
    error_message: str
    error_category: ErrorCategory
    resource_id: str | None = None

    def __str__(self) -> str:
        target = f" ({self.resource_id})" if self.resource_id else ""
        return f"{self.category}.{self.operation}{target}: {self.error_code}"


class ErrorCollector:
    """스레드 세이프 에러 수집기

    여러 탐색 작업 스레드에서 발생하는 에러를 안전하게 수집합니다.
    """

    def __init__(self) -> None:
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(
        self,
        error: Exception,
        category: str,
        operation: str,
        resource_id: str | None = None,
    ) -> CollectedError:
        """예외를 수집하고 WARNING으로 로깅

        Args:
            error: 발생한 예외
            category: 탐색 카테고리
            operation: API 작업 이름
            resource_id: 관련 리소스 (선택사항)

        Returns:
            수집된 CollectedError
        """
        collected = CollectedError(
            timestamp=datetime.now(),
            category=category,
            operation=operation,
            error_code=get_error_code(error),
            error_message=getattr(error, "message", None) or str(error),
            error_category=categorize_error(error),
            resource_id=resource_id,
        )

        with self._lock:
            self._errors.append(collected)

        logger.warning(f"{collected} - {collected.error_message}")
        return collected

    @property
    def errors(self) -> list[CollectedError]:
        """수집된 모든 에러의 복사본 반환 (수집 순서)"""
        with self._lock:
            return list(self._errors)


def try_or_default(
    func: Callable[[], T],
    default: T,
    collector: ErrorCollector,
    category: str,
    operation: str,
    resource_id: str | None = None,
) -> T:
    """함수 실행, 실패 시 기본값 반환 + 에러 수집

    부수적인 API 호출(서브넷 조회 등)에서 실패해도 상위 탐색을 중단하지 않고
    기본값으로 대체하면서 에러를 수집합니다. 취소 신호는 그대로 전파합니다.

    Args:
        func: 실행할 함수 (인자 없음)
        default: 실패 시 반환할 기본값
        collector: ErrorCollector 인스턴스
        category: 탐색 카테고리
        operation: API 작업 이름
        resource_id: 관련 리소스 (선택사항)

    Returns:
        함수 실행 결과 또는 실패 시 default 값
    """
    try:
        return func()
    except DiscoveryCancelledError:
        raise
    except Exception as e:
        collector.collect(e, category, operation, resource_id)
        return default
