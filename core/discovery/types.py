"""
core/discovery/types.py - 탐색 Snapshot 리소스 데이터클래스

한 번의 탐색 실행에서 수집한 OCI 리소스의 표준화된 데이터클래스입니다.
필드 이름은 Snapshot JSON 직렬화의 키로 그대로 사용됩니다.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class TenancyInfo:
    """Tenancy 메타데이터"""

    id: str
    name: str = ""
    home_region: str = ""
    description: str = ""


@dataclass
class Compartment:
    """Compartment 정보

    parent_id는 상위 compartment 또는 tenancy root를 가리킵니다.
    path는 최상위부터의 이름을 /로 이은 경로로, 탐색 후 채워집니다.
    """

    id: str
    name: str
    description: str = ""
    parent_id: str = ""
    path: str = ""


@dataclass
class AvailabilityDomain:
    """Availability Domain (fault domain 목록 포함)"""

    id: str
    name: str
    fault_domains: list[str] = field(default_factory=list)


@dataclass
class Shape:
    """Compute Shape (SKU) 정보"""

    name: str
    processor_description: str = ""
    ocpus: float = 0.0
    memory_gb: float = 0.0
    is_flexible: bool = False
    max_ocpus: float = 0.0
    max_memory_gb: float = 0.0


@dataclass
class Image:
    """OS 이미지 정보"""

    id: str
    display_name: str = ""
    operating_system: str = ""
    operating_system_version: str = ""
    time_created: str = ""
    size_gb: float = 0.0

    @property
    def key(self) -> tuple[str, str]:
        """의미상 식별 키: (OS, OS 버전)"""
        return (self.operating_system, self.operating_system_version)


@dataclass
class SecurityRule:
    """Ingress/Egress 보안 규칙"""

    protocol: str
    source: str = ""
    destination: str = ""
    port_min: int = 0
    port_max: int = 0
    description: str = ""


@dataclass
class SecurityList:
    id: str
    display_name: str = ""
    ingress_rules: list[SecurityRule] = field(default_factory=list)
    egress_rules: list[SecurityRule] = field(default_factory=list)


@dataclass
class RouteRule:
    destination: str = ""
    destination_type: str = ""
    network_entity_id: str = ""
    description: str = ""


@dataclass
class RouteTable:
    id: str
    display_name: str = ""
    routes: list[RouteRule] = field(default_factory=list)


@dataclass
class Subnet:
    id: str
    display_name: str = ""
    cidr_block: str = ""
    availability_domain: str = ""
    is_public: bool = False
    dns_label: str = ""


@dataclass
class InternetGateway:
    id: str
    display_name: str = ""
    is_enabled: bool = False


@dataclass
class NATGateway:
    id: str
    display_name: str = ""
    public_ip: str = ""
    block_traffic: bool = False


@dataclass
class VCN:
    """VCN 및 하위 네트워크 리소스

    하위 목록 조회가 실패한 VCN은 해당 리스트가 비어 있을 수 있습니다.
    """

    id: str
    display_name: str = ""
    cidr_block: str = ""
    compartment_id: str = ""
    dns_label: str = ""
    subnets: list[Subnet] = field(default_factory=list)
    security_lists: list[SecurityList] = field(default_factory=list)
    route_tables: list[RouteTable] = field(default_factory=list)
    internet_gateway: InternetGateway | None = None
    nat_gateway: NATGateway | None = None


@dataclass
class BlockVolume:
    id: str
    display_name: str = ""
    size_gb: int = 0
    availability_domain: str = ""
    vpus_per_gb: int = 0
    is_hydrated: bool = False


@dataclass
class ServiceLimit:
    """범위별 서비스 한도 값"""

    service_name: str
    limit_name: str
    value: int
    scope: str = ""


@dataclass
class Snapshot:
    """탐색 실행 1회의 통합 결과

    각 리스트 필드는 Snapshot이 소유합니다. 카테고리 간 채움 순서는 정해져 있지 않고,
    각 리스트는 조회 결과의 순서를 유지합니다.
    """

    tenancy: TenancyInfo
    compartments: list[Compartment] = field(default_factory=list)
    availability_domains: list[AvailabilityDomain] = field(default_factory=list)
    shapes: list[Shape] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    vcns: list[VCN] = field(default_factory=list)
    block_volumes: list[BlockVolume] = field(default_factory=list)
    limits: list[ServiceLimit] = field(default_factory=list)

    @property
    def has_vcns(self) -> bool:
        return len(self.vcns) > 0

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 딕셔너리"""
        return asdict(self)
