"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    BootstrapError (베이스)
    ├── ConfigurationError (OCI 설정/프로파일 로드 실패)
    ├── DiscoveryError (리소스 탐색)
    │   ├── FatalDiscoveryError (실행 중단)
    │   ├── TolerableDiscoveryError (경고 후 계속 진행)
    │   └── DiscoveryCancelledError (협력적 취소)
    └── GenerationError (Terraform 산출물 생성)

Usage:
    from core.exceptions import FatalDiscoveryError

    try:
        snapshot = orchestrator.run().snapshot
    except FatalDiscoveryError as e:
        print(e.category, e.cause)
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class BootstrapError(Exception):
    """oci-tf-bootstrap 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigurationError(BootstrapError):
    """OCI 설정 파일 또는 프로파일을 사용할 수 없는 경우

    탐색 시작 전에 발생하며, CLI는 설정 도움말을 함께 출력합니다.
    """

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 리소스 탐색 관련 예외
# =============================================================================


class DiscoveryError(BootstrapError):
    """리소스 탐색 관련 예외"""

    def __init__(
        self,
        category: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.category = category
        self.details["category"] = category


class FatalDiscoveryError(DiscoveryError):
    """치명적 카테고리 탐색 실패

    실행 전체를 중단시키며, 실패한 카테고리와 원인 예외를 담습니다.
    """

    def __init__(self, category: str, cause: Optional[Exception] = None):
        super().__init__(category, f"탐색 실패 [{category}]", cause)


class TolerableDiscoveryError(DiscoveryError):
    """허용 가능한 카테고리 탐색 실패

    Orchestrator 내부에서 경고로 기록되고 호출자에게 전파되지 않습니다.
    """

    def __init__(self, category: str, cause: Optional[Exception] = None):
        super().__init__(category, f"탐색 실패 (계속 진행) [{category}]", cause)


class DiscoveryCancelledError(DiscoveryError):
    """다른 작업의 치명적 실패로 취소된 경우"""

    def __init__(self, category: str = "unknown"):
        super().__init__(category, f"탐색 취소됨 [{category}]")


# =============================================================================
# 산출물 생성 관련 예외
# =============================================================================


class GenerationError(BootstrapError):
    """출력 디렉토리 준비 또는 산출물 파일 쓰기 실패

    이미 기록된 이전 산출물은 롤백하지 않습니다.
    """

    def __init__(
        self,
        artifact: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"산출물 생성 실패 [{artifact}]", cause)
        self.artifact = artifact
        self.details["artifact"] = artifact


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

THROTTLING_CODES = {"TooManyRequests", "LimitExceeded"}
NOT_FOUND_CODES = {"NotAuthorizedOrNotFound", "NotFound"}
ACCESS_DENIED_CODES = {"NotAuthenticated", "NotAuthorized", "NotAuthorizedOrNotFound"}


def _status_and_code(error: Exception) -> tuple[Optional[int], str]:
    """oci ServiceError 형식의 status/code 추출

    oci.exceptions.ServiceError는 status(HTTP 상태)와 code 속성을 가집니다.
    """
    status = getattr(error, "status", None)
    code = getattr(error, "code", None)
    return (status if isinstance(status, int) else None), (code if isinstance(code, str) else "")


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    status, code = _status_and_code(error)
    if status in (401, 403):
        return True
    return status == 404 and code in ACCESS_DENIED_CODES


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        스로틀링 오류이면 True
    """
    status, code = _status_and_code(error)
    return status == 429 or code in THROTTLING_CODES


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        리소스 없음 오류이면 True
    """
    status, code = _status_and_code(error)
    return status == 404 and code in NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, BootstrapError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    status, code = _status_and_code(error)
    if status is not None:
        friendly_messages = {
            401: "인증에 실패했습니다. API 키와 fingerprint를 확인하세요.",
            404: "리소스가 없거나 권한이 없습니다. IAM 정책을 확인하세요.",
            429: "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }
        message = getattr(error, "message", str(error))
        return friendly_messages.get(status, f"{code or status}: {message}")

    return str(error)
