"""
core/renderer/generator.py - Terraform 산출물 생성기

Snapshot을 Terraform 파일 세트로 변환합니다.

생성 파일:
    - provider.tf: OCI provider (리전)
    - locals.tf: tenancy 정보, compartment 맵 (Always-Free 모드에서는 한도 안내)
    - data.tf: AD 조회, (OS, 버전)별 이미지 조회, output
    - instance_example.tf: 예제 compute instance
    - network.tf: 탐색된 VCN이 하나도 없을 때만 생성

선언 이름은 실행당 하나의 NameTracker로 발급합니다.
파일 쓰기 실패는 GenerationError로 감싸며, 이미 쓴 파일은 되돌리지 않습니다.

Example:
    generator = TerraformGenerator(snapshot, GeneratorOptions(always_free=True))
    written = generator.generate("./terraform")
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from core.discovery.always_free import DEFAULT_ALWAYS_FREE_RESOURCES, is_arm64_image
from core.discovery.types import Image, Snapshot
from core.exceptions import GenerationError

from .names import NameTracker
from .templates import (
    ALWAYS_FREE_SHAPE,
    default_shape,
    quote,
    render_always_free_notes,
    render_data,
    render_instance,
    render_locals,
    render_network,
    render_provider,
)

logger = logging.getLogger(__name__)

PROVIDER_FILE = "provider.tf"
LOCALS_FILE = "locals.tf"
DATA_FILE = "data.tf"
INSTANCE_FILE = "instance_example.tf"
NETWORK_FILE = "network.tf"


@dataclass
class GeneratorOptions:
    """산출물 생성 옵션

    Attributes:
        always_free: Always-Free tier 안내/예제 사용 여부
    """

    always_free: bool = False


class TerraformGenerator:
    """Snapshot → Terraform 파일 생성기 (생성 1회당 인스턴스 1개)"""

    def __init__(self, snapshot: Snapshot, options: GeneratorOptions | None = None):
        self.snapshot = snapshot
        self.options = options or GeneratorOptions()
        self.names = NameTracker()
        # 발급 순서: compartment → image
        self._compartment_names = [self.names.unique(c.name) for c in snapshot.compartments]
        self._image_sources = self._name_images()

    def generate(self, output_dir: str | Path) -> list[Path]:
        """출력 디렉토리에 Terraform 파일 생성

        Args:
            output_dir: 출력 디렉토리 (없으면 상위 경로까지 생성)

        Returns:
            생성된 파일 경로 목록 (생성 순서)

        Raises:
            GenerationError: 디렉토리 준비 또는 파일 쓰기 실패
        """
        output_path = Path(output_dir)
        try:
            output_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GenerationError(str(output_path), e) from e

        artifacts = [
            (PROVIDER_FILE, self.render_provider),
            (LOCALS_FILE, self.render_locals),
            (DATA_FILE, self.render_data),
            (INSTANCE_FILE, self.render_instance),
        ]
        if self.snapshot.has_vcns:
            logger.info(f"기존 VCN {len(self.snapshot.vcns)}개 발견 - {NETWORK_FILE} 생성 생략")
        else:
            artifacts.append((NETWORK_FILE, self.render_network))

        written: list[Path] = []
        for filename, render in artifacts:
            path = output_path / filename
            try:
                path.write_text(render(), encoding="utf-8")
            except OSError as e:
                raise GenerationError(filename, e) from e
            logger.debug(f"생성: {path}")
            written.append(path)

        logger.info(f"Terraform 파일 {len(written)}개 생성: {output_path}")
        return written

    # =========================================================================
    # 파일별 렌더링
    # =========================================================================

    def render_provider(self) -> str:
        return render_provider(self.snapshot.tenancy.home_region)

    def render_locals(self) -> str:
        tenancy = self.snapshot.tenancy
        compartments = list(zip(self._compartment_names, (c.id for c in self.snapshot.compartments)))
        notes = render_always_free_notes(DEFAULT_ALWAYS_FREE_RESOURCES) if self.options.always_free else ""
        return render_locals(tenancy.id, tenancy.name, tenancy.home_region, compartments, notes)

    def render_data(self) -> str:
        images = [(name, image.operating_system, image.operating_system_version) for name, image in self._image_sources]
        return render_data(images)

    def render_instance(self) -> str:
        if self.options.always_free:
            resources = DEFAULT_ALWAYS_FREE_RESOURCES
            return render_instance(
                "always_free",
                ALWAYS_FREE_SHAPE,
                self._arm_image_source(),
                self._subnet_source(),
                ocpus=resources.a1_flex_ocpus / 2,
                memory_gb=resources.a1_flex_memory_gb / 2,
                always_free=True,
            )

        if self._image_sources:
            image_source = f"data.oci_core_images.{self._image_sources[0][0]}.images[0].id"
        else:
            image_source = quote("<image-ocid>")

        shape = default_shape(self.snapshot.shapes)
        ocpus = memory_gb = None
        if shape.is_flexible:
            ocpus = shape.ocpus or 1
            memory_gb = shape.memory_gb or ocpus * 16
        return render_instance("example", shape.name, image_source, self._subnet_source(), ocpus, memory_gb)

    def render_network(self) -> str:
        return render_network(self.options.always_free)

    def _name_images(self) -> list[tuple[str, Image]]:
        """(OS, 버전)별 첫 이미지에 data source 이름 발급 (탐색 순서 유지)"""
        sources: list[tuple[str, Image]] = []
        seen: set[tuple[str, str]] = set()
        for image in self.snapshot.images:
            if image.key in seen:
                continue
            seen.add(image.key)
            sources.append((self.names.unique(f"{image.operating_system} {image.operating_system_version}"), image))
        return sources

    def _arm_image_source(self) -> str:
        """A1.Flex 예제의 source_id 식

        data source는 아키텍처로 거르지 않으므로 첫 aarch64 이미지의 OCID를 직접 사용합니다.
        """
        for image in self.snapshot.images:
            if is_arm64_image(image):
                return quote(image.id)
        return quote("<image-ocid>")

    def _subnet_source(self) -> str:
        """예제 인스턴스의 subnet_id 식

        network.tf를 생성하면 그 subnet을, 아니면 탐색된 첫 public subnet을 사용합니다.
        """
        if not self.snapshot.has_vcns:
            return "oci_core_subnet.public.id"

        for vcn in self.snapshot.vcns:
            for subnet in vcn.subnets:
                if subnet.is_public:
                    return quote(subnet.id)
        return quote("<subnet-ocid>")


def output_json(snapshot: Snapshot, stream: IO[str]) -> None:
    """Snapshot 전체를 JSON으로 출력 (indent 2, 필터링 없음)"""
    json.dump(snapshot.to_dict(), stream, indent=2, ensure_ascii=False)
    stream.write("\n")
