# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 UI 컴포넌트들 (상태 메시지, 헤더 패널, 진행 표시, 로깅 설정)
"""

from .console import (
    INDENT,
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    DiscoveryProgress,
    console,
    get_console,
    get_progress,
    print_error,
    print_error_tree,
    print_info,
    print_panel_header,
    print_success,
    print_warning,
    setup_logging,
)

__all__ = [
    "console",
    "get_console",
    "get_progress",
    "setup_logging",
    "DiscoveryProgress",
    "INDENT",
    "SYMBOL_SUCCESS",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "SYMBOL_INFO",
    "print_success",
    "print_error",
    "print_warning",
    "print_info",
    "print_panel_header",
    "print_error_tree",
]
