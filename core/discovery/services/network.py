"""
core/discovery/services/network.py - VCN/Network 리소스 수집

VCN 목록 조회 후 VCN별 하위 리소스(Subnet, Security List, Route Table,
Internet Gateway, NAT Gateway)를 순차 조회합니다. 하위 리소스 조회는
VCN의 compartment를 범위로 하며, 실패 시 해당 VCN만 빈 값으로 대체합니다.
"""

from __future__ import annotations

import logging
from typing import Any

from ..caller import RemoteCaller
from ..client import ResourceClient
from ..types import (
    VCN,
    InternetGateway,
    NATGateway,
    RouteRule,
    RouteTable,
    SecurityList,
    SecurityRule,
    Subnet,
)
from .helpers import get_str, parse_port_range

logger = logging.getLogger(__name__)

SERVICE = "network"
CATEGORY = "vcns"


def collect_vcns(client: ResourceClient, caller: RemoteCaller, tenancy_id: str) -> list[VCN]:
    """VCN 리소스를 하위 네트워크 리소스와 함께 수집합니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID (조회 범위)

    Returns:
        VCN 데이터 클래스 목록
    """
    items = caller.paginate(SERVICE, CATEGORY, lambda page: client.list_vcns(tenancy_id, page))

    vcns = []
    for item in items:
        vcn = VCN(
            id=item["id"],
            display_name=get_str(item, "display_name"),
            cidr_block=get_str(item, "cidr_block"),
            compartment_id=get_str(item, "compartment_id"),
            dns_label=get_str(item, "dns_label"),
        )
        _fill_vcn_children(client, caller, vcn)
        vcns.append(vcn)

    return vcns


def _fill_vcn_children(client: ResourceClient, caller: RemoteCaller, vcn: VCN) -> None:
    scope = vcn.compartment_id
    name = vcn.display_name or vcn.id

    def nested(operation: str, func, default):
        return caller.try_or_default(func, default, category=CATEGORY, operation=operation, resource_id=name)

    vcn.subnets = nested("list_subnets", lambda: collect_subnets(client, caller, scope, vcn.id), [])
    vcn.security_lists = nested(
        "list_security_lists", lambda: collect_security_lists(client, caller, scope, vcn.id), []
    )
    vcn.route_tables = nested("list_route_tables", lambda: collect_route_tables(client, caller, scope, vcn.id), [])
    vcn.internet_gateway = nested(
        "list_internet_gateways", lambda: collect_internet_gateway(client, caller, scope, vcn.id), None
    )
    vcn.nat_gateway = nested("list_nat_gateways", lambda: collect_nat_gateway(client, caller, scope, vcn.id), None)


def collect_subnets(client: ResourceClient, caller: RemoteCaller, scope: str, vcn_id: str) -> list[Subnet]:
    """VCN의 Subnet을 수집합니다. prohibit_public_ip_on_vnic가 False면 Public입니다."""
    items = caller.paginate(SERVICE, CATEGORY, lambda page: client.list_subnets(scope, vcn_id, page))
    return [
        Subnet(
            id=item["id"],
            display_name=get_str(item, "display_name"),
            cidr_block=get_str(item, "cidr_block"),
            availability_domain=get_str(item, "availability_domain"),
            is_public=not item.get("prohibit_public_ip_on_vnic"),
            dns_label=get_str(item, "dns_label"),
        )
        for item in items
    ]


def _parse_rule(rule: dict[str, Any], ingress: bool) -> SecurityRule:
    port_min, port_max = parse_port_range(rule)
    return SecurityRule(
        protocol=get_str(rule, "protocol"),
        source=get_str(rule, "source") if ingress else "",
        destination="" if ingress else get_str(rule, "destination"),
        port_min=port_min,
        port_max=port_max,
        description=get_str(rule, "description"),
    )


def collect_security_lists(
    client: ResourceClient, caller: RemoteCaller, scope: str, vcn_id: str
) -> list[SecurityList]:
    """VCN의 Security List를 ingress/egress 규칙과 함께 수집합니다."""
    items = caller.paginate(SERVICE, CATEGORY, lambda page: client.list_security_lists(scope, vcn_id, page))
    return [
        SecurityList(
            id=item["id"],
            display_name=get_str(item, "display_name"),
            ingress_rules=[_parse_rule(r, ingress=True) for r in item.get("ingress_security_rules") or []],
            egress_rules=[_parse_rule(r, ingress=False) for r in item.get("egress_security_rules") or []],
        )
        for item in items
    ]


def collect_route_tables(client: ResourceClient, caller: RemoteCaller, scope: str, vcn_id: str) -> list[RouteTable]:
    """VCN의 Route Table을 경로 규칙과 함께 수집합니다."""
    items = caller.paginate(SERVICE, CATEGORY, lambda page: client.list_route_tables(scope, vcn_id, page))
    return [
        RouteTable(
            id=item["id"],
            display_name=get_str(item, "display_name"),
            routes=[
                RouteRule(
                    destination=get_str(rule, "destination"),
                    destination_type=get_str(rule, "destination_type"),
                    network_entity_id=get_str(rule, "network_entity_id"),
                    description=get_str(rule, "description"),
                )
                for rule in item.get("route_rules") or []
            ],
        )
        for item in items
    ]


def collect_internet_gateway(
    client: ResourceClient, caller: RemoteCaller, scope: str, vcn_id: str
) -> InternetGateway | None:
    """VCN의 첫 번째 Internet Gateway를 수집합니다. 없으면 None."""
    items = caller.paginate(SERVICE, CATEGORY, lambda page: client.list_internet_gateways(scope, vcn_id, page))
    if not items:
        return None

    igw = items[0]
    return InternetGateway(
        id=igw["id"],
        display_name=get_str(igw, "display_name"),
        is_enabled=bool(igw.get("is_enabled")),
    )


def collect_nat_gateway(client: ResourceClient, caller: RemoteCaller, scope: str, vcn_id: str) -> NATGateway | None:
    """VCN의 첫 번째 NAT Gateway를 수집합니다. 없으면 None."""
    items = caller.paginate(SERVICE, CATEGORY, lambda page: client.list_nat_gateways(scope, vcn_id, page))
    if not items:
        return None

    nat = items[0]
    return NATGateway(
        id=nat["id"],
        display_name=get_str(nat, "display_name"),
        public_ip=get_str(nat, "nat_ip"),
        block_traffic=bool(nat.get("block_traffic")),
    )
