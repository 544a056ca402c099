"""
core/discovery/services/limits.py - Service Limit 수집
"""

from __future__ import annotations

from ..caller import RemoteCaller
from ..client import ResourceClient
from ..types import ServiceLimit
from .helpers import get_str

SERVICE = "limits"

# 조회 대상 Limits 서비스
LIMIT_SERVICES = ("compute", "compute-core")


def collect_limits(client: ResourceClient, caller: RemoteCaller, tenancy_id: str) -> list[ServiceLimit]:
    """Compute 관련 Service Limit 값을 수집합니다.

    값이 없거나 0인 항목은 제외합니다. scope는 AD 단위 limit이면
    AD 이름, 아니면 scope_type(GLOBAL, REGION 등)입니다.
    서비스 하나의 조회 실패는 경고 후 건너뜁니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID (조회 범위)

    Returns:
        ServiceLimit 데이터 클래스 목록
    """
    limits: list[ServiceLimit] = []

    for service_name in LIMIT_SERVICES:
        items = caller.try_or_default(
            lambda service_name=service_name: caller.paginate(
                SERVICE,
                "limits",
                lambda page: client.list_limit_values(tenancy_id, service_name, page),
            ),
            default=[],
            category="limits",
            operation="list_limit_values",
            resource_id=service_name,
        )

        for item in items:
            value = item.get("value")
            if not value:
                continue
            limits.append(
                ServiceLimit(
                    service_name=service_name,
                    limit_name=get_str(item, "name"),
                    value=int(value),
                    scope=get_str(item, "availability_domain") or get_str(item, "scope_type"),
                )
            )

    return limits
