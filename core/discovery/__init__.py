"""
core/discovery - OCI Tenancy 리소스 탐색

주요 구성 요소:
- DiscoveryOrchestrator / discover: 카테고리별 병렬 탐색 및 Snapshot 통합
- ResourceClient / OCIResourceClient: 리소스 목록 조회 capability (oci SDK)
- RemoteCaller: 취소 확인, rate limit, 재시도가 적용된 원격 호출
- CATEGORY_POLICY: 카테고리별 실패 정책 (FATAL / TOLERABLE)
- filter_snapshot: Always-Free tier 필터

Example:
    from core.discovery import DiscoveryOrchestrator, OCIResourceClient

    client = OCIResourceClient(config)
    result = DiscoveryOrchestrator(client, tenancy_id, region).run()
"""

from .always_free import (
    ALWAYS_FREE_SHAPES,
    DEFAULT_ALWAYS_FREE_RESOURCES,
    AlwaysFreeResources,
    filter_images,
    filter_shapes,
    filter_snapshot,
)
from .caller import RemoteCaller
from .client import OCIResourceClient, Page, ResourceClient, get_client
from .orchestrator import DiscoveryOrchestrator, DiscoveryResult, discover
from .policy import CATEGORIES, CATEGORY_POLICY, policy_for
from .types import (
    VCN,
    AvailabilityDomain,
    BlockVolume,
    Compartment,
    Image,
    InternetGateway,
    NATGateway,
    RouteRule,
    RouteTable,
    SecurityList,
    SecurityRule,
    ServiceLimit,
    Shape,
    Snapshot,
    Subnet,
    TenancyInfo,
)

__all__ = [
    # Orchestrator
    "DiscoveryOrchestrator",
    "DiscoveryResult",
    "discover",
    # Client
    "ResourceClient",
    "OCIResourceClient",
    "Page",
    "get_client",
    "RemoteCaller",
    # Policy
    "CATEGORY_POLICY",
    "CATEGORIES",
    "policy_for",
    # Always-Free
    "ALWAYS_FREE_SHAPES",
    "AlwaysFreeResources",
    "DEFAULT_ALWAYS_FREE_RESOURCES",
    "filter_shapes",
    "filter_images",
    "filter_snapshot",
    # Types
    "Snapshot",
    "TenancyInfo",
    "Compartment",
    "AvailabilityDomain",
    "Shape",
    "Image",
    "VCN",
    "Subnet",
    "SecurityList",
    "SecurityRule",
    "RouteTable",
    "RouteRule",
    "InternetGateway",
    "NATGateway",
    "BlockVolume",
    "ServiceLimit",
]
