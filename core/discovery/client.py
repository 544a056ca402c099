"""
core/discovery/client.py - ResourceClient 인터페이스 및 OCI SDK 구현

ResourceClient는 한 범위(scope)에서 리소스 카테고리 하나를 조회합니다. 페이지 단위
조회는 Page를 반환하며, 마지막 페이지의 next_page는 None입니다. 항목은 snake_case
키를 가진 dict이므로 탐색 서비스는 SDK 모델을 직접 다루지 않습니다.

OCIResourceClient는 로드된 설정으로 oci SDK client(identity, compute, virtual
network, block storage, limits)를 생성합니다. SDK 자체 재시도는 끄고,
재시도/backoff는 RemoteCaller가 호출 단위로 적용합니다.

Example:
    config = oci.config.from_file("~/.oci/config", "DEFAULT")
    client = OCIResourceClient(config)
    page = client.list_shapes(tenancy_id)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import oci

# 기본 타임아웃 설정
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 60  # 초

_CLIENT_CLASSES: dict[str, Any] = {
    "identity": oci.identity.IdentityClient,
    "compute": oci.core.ComputeClient,
    "network": oci.core.VirtualNetworkClient,
    "blockstorage": oci.core.BlockstorageClient,
    "limits": oci.limits.LimitsClient,
}


@dataclass
class Page:
    """목록 조회 결과 한 페이지

    Attributes:
        items: 리소스 항목 (snake_case dict)
        next_page: 다음 페이지 토큰 (마지막 페이지면 None)
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    next_page: str | None = None


class ResourceClient(Protocol):
    """OCI 리소스 조회 인터페이스 (호출당 카테고리 하나)"""

    def get_tenancy(self, tenancy_id: str) -> dict[str, Any]: ...

    def list_compartments(self, scope: str, page: str | None = None) -> Page: ...

    def list_availability_domains(self, scope: str, page: str | None = None) -> Page: ...

    def list_fault_domains(self, scope: str, availability_domain: str, page: str | None = None) -> Page: ...

    def list_shapes(self, scope: str, page: str | None = None) -> Page: ...

    def list_images(self, scope: str, operating_system: str, page: str | None = None) -> Page: ...

    def list_vcns(self, scope: str, page: str | None = None) -> Page: ...

    def list_subnets(self, scope: str, vcn_id: str, page: str | None = None) -> Page: ...

    def list_security_lists(self, scope: str, vcn_id: str, page: str | None = None) -> Page: ...

    def list_route_tables(self, scope: str, vcn_id: str, page: str | None = None) -> Page: ...

    def list_internet_gateways(self, scope: str, vcn_id: str, page: str | None = None) -> Page: ...

    def list_nat_gateways(self, scope: str, vcn_id: str, page: str | None = None) -> Page: ...

    def list_volumes(self, scope: str, page: str | None = None) -> Page: ...

    def list_limit_values(self, scope: str, service_name: str, page: str | None = None) -> Page: ...


def get_client(
    config: dict[str, Any],
    service_name: str,
    signer: Any | None = None,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """타임아웃이 설정된 oci SDK client 생성

    Args:
        config: oci.config.from_file()로 로드한 설정
        service_name: identity, compute, network, blockstorage, limits
        signer: 별도 signer (Instance Principal 등, 선택사항)
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        **kwargs: client 생성자에 전달할 추가 인자

    Returns:
        oci SDK client
    """
    try:
        client_class = _CLIENT_CLASSES[service_name]
    except KeyError:
        raise ValueError(f"unknown OCI service: {service_name}") from None

    options: dict[str, Any] = {
        "timeout": (connect_timeout, read_timeout),
        "retry_strategy": oci.retry.NoneRetryStrategy(),
    }
    if signer is not None:
        options["signer"] = signer
    options.update(kwargs)

    return client_class(config, **options)


def _to_page(response: Any) -> Page:
    data = response.data
    items = data if isinstance(data, list) else getattr(data, "items", [])
    return Page(
        items=[oci.util.to_dict(item) for item in items],
        next_page=getattr(response, "next_page", None),
    )


class OCIResourceClient:
    """oci Python SDK 기반 ResourceClient"""

    def __init__(self, config: dict[str, Any], signer: Any | None = None, region: str | None = None):
        if region:
            config = {**config, "region": region}
        self._identity = get_client(config, "identity", signer)
        self._compute = get_client(config, "compute", signer)
        self._network = get_client(config, "network", signer)
        self._blockstorage = get_client(config, "blockstorage", signer)
        self._limits = get_client(config, "limits", signer)

    @staticmethod
    def _page_kwargs(page: str | None) -> dict[str, Any]:
        return {"page": page} if page else {}

    def get_tenancy(self, tenancy_id: str) -> dict[str, Any]:
        return oci.util.to_dict(self._identity.get_tenancy(tenancy_id).data)

    def list_compartments(self, scope: str, page: str | None = None) -> Page:
        return _to_page(
            self._identity.list_compartments(
                scope,
                compartment_id_in_subtree=True,
                lifecycle_state="ACTIVE",
                **self._page_kwargs(page),
            )
        )

    def list_availability_domains(self, scope: str, page: str | None = None) -> Page:
        return _to_page(self._identity.list_availability_domains(scope))

    def list_fault_domains(self, scope: str, availability_domain: str, page: str | None = None) -> Page:
        return _to_page(self._identity.list_fault_domains(scope, availability_domain))

    def list_shapes(self, scope: str, page: str | None = None) -> Page:
        return _to_page(self._compute.list_shapes(scope, **self._page_kwargs(page)))

    def list_images(self, scope: str, operating_system: str, page: str | None = None) -> Page:
        return _to_page(
            self._compute.list_images(
                scope,
                operating_system=operating_system,
                sort_by="TIMECREATED",
                sort_order="DESC",
                **self._page_kwargs(page),
            )
        )

    def list_vcns(self, scope: str, page: str | None = None) -> Page:
        return _to_page(self._network.list_vcns(scope, **self._page_kwargs(page)))

    def list_subnets(self, scope: str, vcn_id: str, page: str | None = None) -> Page:
        return _to_page(self._network.list_subnets(scope, vcn_id=vcn_id, **self._page_kwargs(page)))

    def list_security_lists(self, scope: str, vcn_id: str, page: str | None = None) -> Page:
        return _to_page(self._network.list_security_lists(scope, vcn_id=vcn_id, **self._page_kwargs(page)))

    def list_route_tables(self, scope: str, vcn_id: str, page: str | None = None) -> Page:
        return _to_page(self._network.list_route_tables(scope, vcn_id=vcn_id, **self._page_kwargs(page)))

    def list_internet_gateways(self, scope: str, vcn_id: str, page: str | None = None) -> Page:
        return _to_page(self._network.list_internet_gateways(scope, vcn_id=vcn_id, **self._page_kwargs(page)))

    def list_nat_gateways(self, scope: str, vcn_id: str, page: str | None = None) -> Page:
        return _to_page(self._network.list_nat_gateways(scope, vcn_id=vcn_id, **self._page_kwargs(page)))

    def list_volumes(self, scope: str, page: str | None = None) -> Page:
        return _to_page(self._blockstorage.list_volumes(compartment_id=scope, **self._page_kwargs(page)))

    def list_limit_values(self, scope: str, service_name: str, page: str | None = None) -> Page:
        return _to_page(self._limits.list_limit_values(scope, service_name, **self._page_kwargs(page)))
