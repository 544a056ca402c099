"""
core/renderer/templates.py - Terraform 파일 템플릿

각 render_* 함수는 데이터를 받아 .tf 파일 내용(문자열)을 반환합니다.
이름 발급과 파일 쓰기는 generator 모듈이 담당합니다.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from core.discovery.always_free import AlwaysFreeResources
from core.discovery.types import Shape

HEADER = "# Generated by oci-tf-bootstrap. Review before applying.\n"

ALWAYS_FREE_SHAPE = "VM.Standard.A1.Flex"
DEFAULT_SHAPE = "VM.Standard.E4.Flex"


def quote(value: str) -> str:
    """HCL 문자열 리터럴 (템플릿 보간 시퀀스는 이스케이프)"""
    return json.dumps(value, ensure_ascii=False).replace("${", "$${").replace("%{", "%%{")


def number(value: float) -> str:
    """HCL 숫자 리터럴 (정수 값은 소수점 없이)"""
    return f"{value:g}"


def render_provider(region: str) -> str:
    return f"""{HEADER}
terraform {{
  required_providers {{
    oci = {{
      source  = "oracle/oci"
      version = ">= 5.0"
    }}
  }}
}}

provider "oci" {{
  region = {quote(region)}
}}
"""


def render_always_free_notes(resources: AlwaysFreeResources) -> str:
    return f"""
# =============================================================================
# OCI Always-Free Tier
# This configuration targets always-free tier resources only.
#
# Compute:
#   - VM.Standard.A1.Flex (ARM): {number(resources.a1_flex_ocpus)} OCPUs + {number(resources.a1_flex_memory_gb)}GB memory total
#   - VM.Standard.E2.1.Micro (x86): {resources.e2_micro_instances} instances
# Storage:
#   - Block Storage: {resources.block_storage_gb}GB total (boot + block volumes)
# Networking:
#   - Outbound Data: {resources.outbound_data_tb}TB per month
#   - 1 Flexible Load Balancer (10 Mbps)
# Other:
#   - Bastion service
# =============================================================================
"""


def render_locals(
    tenancy_id: str,
    tenancy_name: str,
    region: str,
    compartments: Sequence[tuple[str, str]],
    always_free_notes: str = "",
) -> str:
    """locals.tf

    Args:
        compartments: (선언 이름, compartment OCID) 목록
    """
    entries = "\n".join(f"    {name} = {quote(ocid)}" for name, ocid in compartments)
    compartment_block = f"\n  compartments = {{\n{entries}\n  }}\n" if compartments else "\n  compartments = {}\n"

    return f"""{HEADER}{always_free_notes}
locals {{
  tenancy_ocid = {quote(tenancy_id)}
  tenancy_name = {quote(tenancy_name)}
  region       = {quote(region)}
{compartment_block}}}
"""


def render_data(images: Sequence[tuple[str, str, str]]) -> str:
    """data.tf

    Args:
        images: (선언 이름, OS, OS 버전) 목록 (중복 제거 완료)
    """
    blocks = [
        f"""{HEADER}
data "oci_identity_availability_domains" "ads" {{
  compartment_id = local.tenancy_ocid
}}
"""
    ]

    for name, os_name, os_version in images:
        blocks.append(
            f"""
data "oci_core_images" "{name}" {{
  compartment_id           = local.tenancy_ocid
  operating_system         = {quote(os_name)}
  operating_system_version = {quote(os_version)}
  sort_by                  = "TIMECREATED"
  sort_order               = "DESC"
}}
"""
        )

    image_outputs = "\n".join(
        f"    {name} = try(data.oci_core_images.{name}.images[0].id, null)" for name, _, _ in images
    )
    latest_images = f"{{\n{image_outputs}\n  }}" if images else "{}"

    blocks.append(
        f"""
output "availability_domains" {{
  value = data.oci_identity_availability_domains.ads.availability_domains[*].name
}}

output "latest_images" {{
  value = {latest_images}
}}
"""
    )
    return "".join(blocks)


def render_instance(
    resource_name: str,
    shape: str,
    image_source: str,
    subnet_source: str,
    ocpus: float | None = None,
    memory_gb: float | None = None,
    always_free: bool = False,
) -> str:
    """instance_example.tf

    Args:
        resource_name: 리소스 선언 이름
        shape: Shape 이름
        image_source: source_id에 들어갈 HCL 식
        subnet_source: subnet_id에 들어갈 HCL 식
        ocpus: Flexible Shape OCPU (None이면 shape_config 생략)
        memory_gb: Flexible Shape 메모리
    """
    note = (
        "# Uses half of the always-free A1.Flex allocation, leaving room for a second instance.\n"
        if always_free
        else ""
    )
    shape_config = ""
    if ocpus is not None and memory_gb is not None:
        shape_config = f"""
  shape_config {{
    ocpus         = {number(ocpus)}
    memory_in_gbs = {number(memory_gb)}
  }}
"""

    return f"""{HEADER}
# Example compute instance. Set ssh_authorized_keys and review before applying.
{note}
resource "oci_core_instance" "{resource_name}" {{
  availability_domain = data.oci_identity_availability_domains.ads.availability_domains[0].name
  compartment_id      = local.tenancy_ocid
  display_name        = {quote(resource_name.replace("_", "-") + "-instance")}
  shape               = {quote(shape)}
{shape_config}
  source_details {{
    source_type = "image"
    source_id   = {image_source}
  }}

  create_vnic_details {{
    subnet_id        = {subnet_source}
    assign_public_ip = true
  }}

  metadata = {{
    ssh_authorized_keys = file("~/.ssh/id_rsa.pub")
  }}
}}
"""


def render_network(always_free: bool = False) -> str:
    note = (
        """
# VCN and networking resources are FREE in the always-free tier
# (VCN, subnets, internet gateway, route tables, security lists).
"""
        if always_free
        else ""
    )

    return f"""{HEADER}{note}
resource "oci_core_vcn" "main" {{
  compartment_id = local.tenancy_ocid
  cidr_blocks    = ["10.0.0.0/16"]
  display_name   = "main-vcn"
  dns_label      = "main"
}}

resource "oci_core_internet_gateway" "main" {{
  compartment_id = local.tenancy_ocid
  vcn_id         = oci_core_vcn.main.id
  display_name   = "main-igw"
  enabled        = true
}}

resource "oci_core_route_table" "public" {{
  compartment_id = local.tenancy_ocid
  vcn_id         = oci_core_vcn.main.id
  display_name   = "public-rt"

  route_rules {{
    destination       = "0.0.0.0/0"
    destination_type  = "CIDR_BLOCK"
    network_entity_id = oci_core_internet_gateway.main.id
  }}
}}

resource "oci_core_security_list" "public" {{
  compartment_id = local.tenancy_ocid
  vcn_id         = oci_core_vcn.main.id
  display_name   = "public-sl"

  egress_security_rules {{
    destination = "0.0.0.0/0"
    protocol    = "all"
  }}

  ingress_security_rules {{
    protocol = "6"
    source   = "0.0.0.0/0"

    tcp_options {{
      min = 22
      max = 22
    }}
  }}

  ingress_security_rules {{
    protocol = "1"
    source   = "0.0.0.0/0"

    icmp_options {{
      type = 3
      code = 4
    }}
  }}
}}

resource "oci_core_subnet" "public" {{
  compartment_id             = local.tenancy_ocid
  vcn_id                     = oci_core_vcn.main.id
  cidr_block                 = "10.0.1.0/24"
  display_name               = "public-subnet"
  dns_label                  = "public"
  route_table_id             = oci_core_route_table.public.id
  security_list_ids          = [oci_core_security_list.public.id]
  prohibit_public_ip_on_vnic = false
}}
"""


def default_shape(shapes: Sequence[Shape]) -> Shape:
    """예제 인스턴스용 Shape (탐색 결과가 없으면 E4.Flex 1 OCPU)"""
    if shapes:
        return shapes[0]
    return Shape(name=DEFAULT_SHAPE, ocpus=1, memory_gb=16, is_flexible=True)
