"""
core/discovery/services/storage.py - Block Storage 리소스 수집
"""

from __future__ import annotations

from ..caller import RemoteCaller
from ..client import ResourceClient
from ..types import BlockVolume
from .helpers import get_number, get_str

SERVICE = "blockstorage"


def collect_block_volumes(client: ResourceClient, caller: RemoteCaller, tenancy_id: str) -> list[BlockVolume]:
    """Block Volume 리소스를 수집합니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID (조회 범위)

    Returns:
        BlockVolume 데이터 클래스 목록
    """
    items = caller.paginate(SERVICE, "block_volumes", lambda page: client.list_volumes(tenancy_id, page))
    return [
        BlockVolume(
            id=item["id"],
            display_name=get_str(item, "display_name"),
            size_gb=int(get_number(item, "size_in_gbs")),
            availability_domain=get_str(item, "availability_domain"),
            vpus_per_gb=int(get_number(item, "vpus_per_gb")),
            is_hydrated=bool(item.get("is_hydrated")),
        )
        for item in items
    ]
