"""
core/parallel/decorators.py - OCI API 에러 분류 및 재시도 유틸리티

OCI API 호출의 에러 분류, 재시도 가능 여부 판단,
지수 백오프 재시도 설정을 제공합니다.

주요 구성 요소:
- RetryConfig: 재시도 설정 (지수 백오프 + 지터)
- categorize_error: 예외를 ErrorCategory로 분류
- get_error_code: 예외에서 에러 코드 추출
- is_retryable: 재시도 가능 여부 판단
- call_with_retry: 단일 원격 호출에 재시도 적용 (취소 토큰 인식)
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from requests.exceptions import RequestException

from core.exceptions import is_access_denied, is_not_found, is_throttling

from .types import ErrorCategory

if TYPE_CHECKING:
    from .cancel import CancelToken

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """재시도 설정

    Attributes:
        max_retries: 최대 재시도 횟수 (0이면 재시도 안함)
        base_delay: 기본 대기 시간 (초)
        max_delay: 최대 대기 시간 (초)
        exponential_base: 지수 백오프 밑수
        jitter: 지터 사용 여부 (대기 시간에 랜덤성 추가)
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True

    def get_delay(self, attempt: int) -> float:
        """재시도 대기 시간 계산

        Exponential backoff with optional jitter.

        Args:
            attempt: 현재 시도 횟수 (0부터 시작)

        Returns:
            대기 시간 (초)
        """
        delay = self.base_delay * (self.exponential_base**attempt)
        delay = min(delay, self.max_delay)

        if self.jitter:
            # Full jitter: [0, delay]
            delay = random.uniform(0, delay)

        return delay


# 기본 재시도 설정
DEFAULT_RETRY_CONFIG = RetryConfig()

# 재시도 가능한 HTTP 상태 코드
RETRYABLE_STATUS_CODES: set[int] = {409, 429, 500, 502, 503, 504}

# 재시도 가능한 OCI 에러 코드
RETRYABLE_ERROR_CODES: set[str] = {
    "TooManyRequests",
    "InternalServerError",
    "ServiceUnavailable",
    "IncorrectState",
    "RequestTimeout",
}


def categorize_error(error: Exception) -> ErrorCategory:
    """예외 객체를 분석하여 ErrorCategory로 분류

    ServiceError의 경우 status/code로 분류하고,
    네트워크/타임아웃 에러는 타입으로 분류합니다.

    Args:
        error: 분류할 예외

    Returns:
        에러 카테고리
    """
    if is_throttling(error):
        return ErrorCategory.THROTTLING
    if is_access_denied(error):
        return ErrorCategory.ACCESS_DENIED
    if is_not_found(error):
        return ErrorCategory.NOT_FOUND

    status = getattr(error, "status", None)
    if isinstance(status, int):
        if status in (408, 504):
            return ErrorCategory.TIMEOUT
        if status == 400:
            return ErrorCategory.INVALID_REQUEST
        if status >= 500:
            return ErrorCategory.SERVICE_ERROR

    if isinstance(error, TimeoutError):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (RequestException, ConnectionError, OSError)):
        return ErrorCategory.NETWORK

    return ErrorCategory.UNKNOWN


def get_error_code(error: Exception) -> str:
    """예외 객체에서 에러 코드 문자열 추출

    ServiceError의 경우 code 속성을, 그 외에는 예외 클래스명을 반환합니다.

    Args:
        error: 예외 객체

    Returns:
        에러 코드 문자열
    """
    code = getattr(error, "code", None)
    if isinstance(code, str) and code:
        return code
    return error.__class__.__name__


def is_retryable(error: Exception) -> bool:
    """재시도 가능한 에러인지 확인

    Args:
        error: 확인할 예외

    Returns:
        재시도 가능하면 True
    """
    status = getattr(error, "status", None)
    if isinstance(status, int):
        return status in RETRYABLE_STATUS_CODES or get_error_code(error) in RETRYABLE_ERROR_CODES

    return isinstance(error, (RequestException, ConnectionError, TimeoutError))


def call_with_retry(
    func: Callable[[], T],
    retry_config: RetryConfig | None = None,
    cancel_token: CancelToken | None = None,
    label: str = "",
) -> T:
    """단일 원격 호출을 지수 백오프로 재시도

    재시도 불가능한 에러이거나 재시도를 소진하면 마지막 예외를 그대로 전파합니다.
    백오프 대기 중 취소 신호가 오면 즉시 중단합니다.

    Args:
        func: 인자 없는 원격 호출
        retry_config: 재시도 설정 (None이면 기본값)
        cancel_token: 취소 토큰 (선택사항)
        label: 로그용 호출 이름

    Returns:
        func 실행 결과
    """
    config = retry_config or DEFAULT_RETRY_CONFIG

    for attempt in range(config.max_retries + 1):
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(label)
        try:
            return func()
        except Exception as e:
            if not is_retryable(e) or attempt >= config.max_retries:
                raise

            delay = config.get_delay(attempt)
            logger.debug(f"[{label}] 시도 {attempt + 1} 실패 ({get_error_code(e)}), {delay:.2f}초 후 재시도...")
            if cancel_token is not None:
                if cancel_token.wait(delay):
                    cancel_token.raise_if_cancelled(label)
            else:
                time.sleep(delay)

    # range가 최소 1회 실행되므로 도달하지 않음
    raise RuntimeError(f"[{label}] 재시도 루프 종료")
