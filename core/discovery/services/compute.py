"""
core/discovery/services/compute.py - Compute 리소스 수집 (Shape, Image)
"""

from __future__ import annotations

import logging

from ..caller import RemoteCaller
from ..client import ResourceClient
from ..types import Image, Shape
from .helpers import get_number, get_str

logger = logging.getLogger(__name__)

SERVICE = "compute"

# 이미지 조회 대상 OS 계열
IMAGE_OS_FAMILIES = ("Oracle Linux", "Canonical Ubuntu", "CentOS", "Windows")


def collect_shapes(client: ResourceClient, caller: RemoteCaller, tenancy_id: str) -> list[Shape]:
    """Compute Shape 리소스를 수집합니다.

    Shape 목록은 AD별로 같은 이름이 반복되므로 이름 기준으로 중복을 제거합니다.
    ocpu_options가 있으면 Flexible Shape로 보고 최대 OCPU/메모리를 함께 기록합니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID (조회 범위)

    Returns:
        Shape 데이터 클래스 목록 (응답 순서 유지)
    """
    items = caller.paginate(SERVICE, "shapes", lambda page: client.list_shapes(tenancy_id, page))

    shapes: list[Shape] = []
    seen: set[str] = set()
    for item in items:
        name = get_str(item, "shape")
        if name in seen:
            continue
        seen.add(name)

        ocpu_options = item.get("ocpu_options")
        memory_options = item.get("memory_options") or {}
        shapes.append(
            Shape(
                name=name,
                processor_description=get_str(item, "processor_description"),
                ocpus=float(get_number(item, "ocpus")),
                memory_gb=float(get_number(item, "memory_in_gbs")),
                is_flexible=ocpu_options is not None,
                max_ocpus=float(get_number(ocpu_options or {}, "max")),
                max_memory_gb=float(get_number(memory_options, "max_in_g_bs")),
            )
        )

    return shapes


def collect_images(client: ResourceClient, caller: RemoteCaller, tenancy_id: str) -> list[Image]:
    """OS Image 리소스를 수집합니다.

    OS 계열별로 최신순(TIMECREATED 내림차순) 조회 후 (OS, 버전) 기준으로
    첫 항목(가장 최근 이미지)만 남깁니다. 한 OS 계열 조회가 실패하면
    경고를 남기고 해당 계열만 건너뜁니다.

    Args:
        client: ResourceClient
        caller: 원격 호출 드라이버
        tenancy_id: Tenancy OCID (조회 범위)

    Returns:
        Image 데이터 클래스 목록
    """
    images: list[Image] = []

    for os_name in IMAGE_OS_FAMILIES:
        items = caller.try_or_default(
            lambda os_name=os_name: caller.paginate(
                SERVICE,
                "images",
                lambda page: client.list_images(tenancy_id, os_name, page),
            ),
            default=[],
            category="images",
            operation="list_images",
            resource_id=os_name,
        )

        seen_versions: set[str] = set()
        for item in items:
            version = get_str(item, "operating_system_version")
            if version in seen_versions:
                continue
            seen_versions.add(version)

            size_mb = item.get("size_in_mbs")
            images.append(
                Image(
                    id=item["id"],
                    display_name=get_str(item, "display_name"),
                    operating_system=get_str(item, "operating_system"),
                    operating_system_version=version,
                    time_created=get_str(item, "time_created"),
                    size_gb=size_mb / 1024.0 if size_mb else 0.0,
                )
            )

        logger.debug(f"[images] {os_name}: {len(seen_versions)}개 버전")

    return images
