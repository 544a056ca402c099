"""
core/discovery/services/identity.py - Identity 리소스 수집 (Tenancy, Compartment, AD)
"""

from __future__ import annotations

import logging

from ..caller import RemoteCaller
from ..client import ResourceClient
from ..types import AvailabilityDomain, Compartment, TenancyInfo
from .helpers import get_str

logger = logging.getLogger(__name__)

SERVICE = "identity"


def collect_tenancy(client: ResourceClient, caller: RemoteCaller, tenancy_id: str, region: str) -> TenancyInfo:
    """Tenancy 정보를 수집합니다.

    GetTenancy 실패 시 OCID만 채운 TenancyInfo로 대체합니다.
    home_region은 조회 결과와 무관하게 실행 리전으로 덮어씁니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID
        region: 실행 리전 (--region 우선)

    Returns:
        TenancyInfo
    """
    fallback = {"id": tenancy_id}
    data = caller.try_or_default(
        lambda: caller.call(SERVICE, "tenancy", lambda: client.get_tenancy(tenancy_id)),
        default=fallback,
        category="tenancy",
        operation="get_tenancy",
    )

    return TenancyInfo(
        id=get_str(data, "id") or tenancy_id,
        name=get_str(data, "name"),
        description=get_str(data, "description"),
        home_region=region,
    )


def collect_compartments(client: ResourceClient, caller: RemoteCaller, tenancy_id: str) -> list[Compartment]:
    """Compartment 리소스를 수집합니다.

    Tenancy 하위 전체(subtree)의 ACTIVE Compartment를 조회하고
    이름 경로(path)를 채워 반환합니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID (조회 범위)

    Returns:
        Compartment 데이터 클래스 목록
    """
    items = caller.paginate(SERVICE, "compartments", lambda page: client.list_compartments(tenancy_id, page))

    compartments = [
        Compartment(
            id=item["id"],
            name=get_str(item, "name"),
            description=get_str(item, "description"),
            parent_id=get_str(item, "compartment_id"),
        )
        for item in items
    ]
    fill_compartment_paths(compartments)
    return compartments


def fill_compartment_paths(compartments: list[Compartment]) -> None:
    """각 Compartment의 path를 최상위부터의 이름 체인으로 채움

    목록에 없는 부모(Tenancy 루트)에서 체인이 끝납니다.
    예: prod > app 이면 app.path == "prod/app"
    """
    by_id = {c.id: c for c in compartments}

    for compartment in compartments:
        names = [compartment.name]
        seen = {compartment.id}
        parent = by_id.get(compartment.parent_id)
        while parent is not None and parent.id not in seen:
            names.append(parent.name)
            seen.add(parent.id)
            parent = by_id.get(parent.parent_id)
        compartment.path = "/".join(reversed(names))


def collect_availability_domains(
    client: ResourceClient, caller: RemoteCaller, tenancy_id: str
) -> list[AvailabilityDomain]:
    """Availability Domain 리소스를 수집합니다.

    AD 목록 조회 후 AD별 Fault Domain 이름을 함께 수집합니다.
    Fault Domain 조회 실패 시 해당 AD는 빈 목록으로 대체합니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID (조회 범위)

    Returns:
        AvailabilityDomain 데이터 클래스 목록
    """
    items = caller.paginate(
        SERVICE, "availability_domains", lambda page: client.list_availability_domains(tenancy_id, page)
    )

    ads = []
    for item in items:
        ad_name = get_str(item, "name")
        fault_domains = caller.try_or_default(
            lambda ad_name=ad_name: [
                get_str(fd, "name")
                for fd in caller.paginate(
                    SERVICE,
                    "fault_domains",
                    lambda page: client.list_fault_domains(tenancy_id, ad_name, page),
                )
            ],
            default=[],
            category="availability_domains",
            operation="list_fault_domains",
            resource_id=ad_name,
        )
        ads.append(AvailabilityDomain(id=get_str(item, "id"), name=ad_name, fault_domains=fault_domains))

    return ads
