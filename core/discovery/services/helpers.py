"""
core/discovery/services/helpers.py - 공통 헬퍼 함수

oci.util.to_dict()로 변환된 항목에서 값 추출, 포트 범위 파싱 등 공통 유틸리티.
"""

from __future__ import annotations

from typing import Any


def get_str(item: dict[str, Any], key: str) -> str:
    """
    None 값을 빈 문자열로 바꿔 반환.

    Args:
        item: 리소스 항목 {"display_name": "vcn-1", ...}
        key: 찾을 키

    Returns:
        문자열 값 또는 빈 문자열
    """
    value = item.get(key)
    return "" if value is None else str(value)


def get_number(item: dict[str, Any], key: str, default: float = 0) -> Any:
    """None 값을 default로 바꿔 반환"""
    value = item.get(key)
    return default if value is None else value


def parse_port_range(rule: dict[str, Any]) -> tuple[int, int]:
    """
    보안 규칙의 목적지 포트 범위 추출.

    tcp_options, udp_options 순으로 확인하며 udp_options가 있으면 우선합니다.

    Args:
        rule: 보안 규칙 {"protocol": "6", "tcp_options": {"destination_port_range": {...}}}

    Returns:
        (port_min, port_max), 포트 범위가 없으면 (0, 0)
    """
    port_min, port_max = 0, 0
    for options_key in ("tcp_options", "udp_options"):
        options = rule.get(options_key) or {}
        port_range = options.get("destination_port_range")
        if port_range:
            port_min = int(port_range.get("min") or 0)
            port_max = int(port_range.get("max") or 0)
    return port_min, port_max
