"""
core/discovery/always_free.py - Always-Free tier 필터

탐색된 Snapshot을 OCI Always-Free tier로 실행 가능한 범위로 좁힙니다.

- Shape: VM.Standard.A1.Flex (ARM), VM.Standard.E2.1.Micro (x86)
- Image: ARM(aarch64) 이미지 우선, 그다음 아직 없는 (OS, 버전)의 minimal 이미지

모든 함수는 순수 함수이며 입력 Snapshot을 변경하지 않습니다.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass

from .types import Image, Shape, Snapshot

ALWAYS_FREE_SHAPES = frozenset({"VM.Standard.A1.Flex", "VM.Standard.E2.1.Micro"})


@dataclass(frozen=True)
class AlwaysFreeResources:
    """Tenancy당 Always-Free 제공량

    Attributes:
        a1_flex_ocpus: 모든 A1.Flex 인스턴스가 나눠 쓰는 OCPU
        a1_flex_memory_gb: 모든 A1.Flex 인스턴스가 나눠 쓰는 메모리
        e2_micro_instances: E2.1.Micro 인스턴스 수
        block_storage_gb: Block + Boot Volume 합계
        outbound_data_tb: 월간 아웃바운드 데이터 전송량
    """

    a1_flex_ocpus: float = 4
    a1_flex_memory_gb: float = 24
    e2_micro_instances: int = 2
    block_storage_gb: int = 200
    outbound_data_tb: int = 10


DEFAULT_ALWAYS_FREE_RESOURCES = AlwaysFreeResources()


def _contains(image: Image, marker: str) -> bool:
    return marker in image.operating_system_version.lower() or marker in image.display_name.lower()


def is_arm64_image(image: Image) -> bool:
    return _contains(image, "aarch64")


def is_minimal_image(image: Image) -> bool:
    return _contains(image, "minimal")


def filter_shapes(shapes: Iterable[Shape]) -> list[Shape]:
    """Always-Free 대상 Shape만 유지 (순서 보존)"""
    return [s for s in shapes if s.name in ALWAYS_FREE_SHAPES]


def filter_images(images: Iterable[Image]) -> list[Image]:
    """Always-Free Shape에서 쓸 수 있는 이미지만 유지

    ARM 이미지를 먼저 선택하므로 같은 (OS, 버전)이면 minimal x86 이미지보다
    ARM 이미지가 남습니다. 나머지는 제외합니다.
    """
    images = list(images)
    filtered: list[Image] = []
    seen: set[tuple[str, str]] = set()

    for selector in (is_arm64_image, is_minimal_image):
        for image in images:
            if selector(image) and image.key not in seen:
                seen.add(image.key)
                filtered.append(image)

    return filtered


def filter_snapshot(snapshot: Snapshot) -> Snapshot:
    """Shape/Image를 좁힌 Snapshot 사본 반환

    나머지 필드도 깊은 복사되어 입력과 리스트/객체를 공유하지 않습니다.
    """
    narrowed = copy.deepcopy(snapshot)
    narrowed.shapes = filter_shapes(narrowed.shapes)
    narrowed.images = filter_images(narrowed.images)
    return narrowed
