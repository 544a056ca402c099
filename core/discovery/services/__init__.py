"""
core/discovery/services - 카테고리별 리소스 수집기 패키지

각 서비스 모듈은 ``collect_*`` 함수를 제공하며, 단일 Tenancy 범위에서 해당
리소스를 수집합니다. 모든 원격 호출은 ``RemoteCaller``를 거쳐 취소 확인,
rate limit, 재시도가 적용됩니다. 이 함수들은 ``DiscoveryOrchestrator``에서
카테고리별 작업으로 병렬 실행됩니다.

카테고리 (8개):
    - Identity: tenancy, compartments, availability_domains
    - Compute: shapes, images
    - Network: vcns (subnets, security lists, route tables, gateways 포함)
    - Storage: block_volumes
    - Limits: limits
"""

from .compute import IMAGE_OS_FAMILIES, collect_images, collect_shapes
from .identity import collect_availability_domains, collect_compartments, collect_tenancy, fill_compartment_paths
from .limits import LIMIT_SERVICES, collect_limits
from .network import collect_vcns
from .storage import collect_block_volumes

__all__ = [
    # Identity
    "collect_tenancy",
    "collect_compartments",
    "collect_availability_domains",
    "fill_compartment_paths",
    # Compute
    "collect_shapes",
    "collect_images",
    "IMAGE_OS_FAMILIES",
    # Network
    "collect_vcns",
    # Storage
    "collect_block_volumes",
    # Limits
    "collect_limits",
    "LIMIT_SERVICES",
]
