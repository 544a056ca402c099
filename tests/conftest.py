"""
tests/conftest.py - pytest 공통 픽스처

OCI ResourceClient 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(fake_client, caller):
        # fake_client: 응답이 스크립트된 ResourceClient
        # caller: 재시도/대기 없는 RemoteCaller
        pass
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import oci
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.discovery.caller import RemoteCaller  # noqa: E402
from core.discovery.client import Page  # noqa: E402
from core.parallel import CancelToken, ErrorCollector, RetryConfig, reset_rate_limiters  # noqa: E402

TENANCY_ID = "ocid1.tenancy.oc1..test"
REGION = "us-ashburn-1"

# 테스트용 재시도 설정 (대기 없음)
NO_RETRY = RetryConfig(max_retries=0, base_delay=0.0, jitter=False)


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정"""
    monkeypatch.delenv("OCI_CLI_PROFILE", raising=False)
    monkeypatch.delenv("OCI_CLI_CONFIG_FILE", raising=False)
    reset_rate_limiters()

    yield

    reset_rate_limiters()


# =============================================================================
# OCI 모킹 헬퍼
# =============================================================================


def make_service_error(status: int, code: str, message: str = "test error") -> oci.exceptions.ServiceError:
    """oci ServiceError 생성"""
    return oci.exceptions.ServiceError(status, code, {}, message)


class FakeResourceClient:
    """응답이 스크립트된 ResourceClient

    responses의 값:
        - list: 항목 목록 (page_size 단위로 페이지 분할)
        - Exception: 호출 시 raise
        - callable: 호출 인자(scope 제외)를 받아 list 또는 Exception 반환
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None, page_size: int = 2):
        self.responses: Dict[str, Any] = responses or {}
        self.page_size = page_size
        self.calls: List[tuple] = []

    def _resolve(self, name: str, args: tuple) -> Any:
        response = self.responses.get(name, [])
        if not isinstance(response, (list, dict, Exception)) and callable(response):
            response = response(*args)
        if isinstance(response, Exception):
            raise response
        return response

    def _serve(self, name: str, scope: str, args: tuple, page: Optional[str]) -> Page:
        self.calls.append((name, scope, args, page))
        items = self._resolve(name, args)

        start = int(page or 0)
        end = start + self.page_size
        return Page(items=list(items[start:end]), next_page=str(end) if end < len(items) else None)

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def get_tenancy(self, tenancy_id: str) -> Dict[str, Any]:
        self.calls.append(("get_tenancy", tenancy_id, (), None))
        response = self.responses.get("get_tenancy", {"id": tenancy_id, "name": "test-tenancy"})
        if isinstance(response, Exception):
            raise response
        return response

    def list_compartments(self, scope, page=None):
        return self._serve("list_compartments", scope, (), page)

    def list_availability_domains(self, scope, page=None):
        return self._serve("list_availability_domains", scope, (), page)

    def list_fault_domains(self, scope, availability_domain, page=None):
        return self._serve("list_fault_domains", scope, (availability_domain,), page)

    def list_shapes(self, scope, page=None):
        return self._serve("list_shapes", scope, (), page)

    def list_images(self, scope, operating_system, page=None):
        return self._serve("list_images", scope, (operating_system,), page)

    def list_vcns(self, scope, page=None):
        return self._serve("list_vcns", scope, (), page)

    def list_subnets(self, scope, vcn_id, page=None):
        return self._serve("list_subnets", scope, (vcn_id,), page)

    def list_security_lists(self, scope, vcn_id, page=None):
        return self._serve("list_security_lists", scope, (vcn_id,), page)

    def list_route_tables(self, scope, vcn_id, page=None):
        return self._serve("list_route_tables", scope, (vcn_id,), page)

    def list_internet_gateways(self, scope, vcn_id, page=None):
        return self._serve("list_internet_gateways", scope, (vcn_id,), page)

    def list_nat_gateways(self, scope, vcn_id, page=None):
        return self._serve("list_nat_gateways", scope, (vcn_id,), page)

    def list_volumes(self, scope, page=None):
        return self._serve("list_volumes", scope, (), page)

    def list_limit_values(self, scope, service_name, page=None):
        return self._serve("list_limit_values", scope, (service_name,), page)


def by_argument(mapping: Dict[str, Any], default: Any = None) -> Callable[..., Any]:
    """첫 번째 인자(OS 계열, VCN ID, 서비스 이름 등)별 응답"""

    def respond(key, *_):
        return mapping.get(key, [] if default is None else default)

    return respond


# =============================================================================
# 픽스처
# =============================================================================


@pytest.fixture
def fake_client():
    """빈 응답의 FakeResourceClient"""
    return FakeResourceClient()


@pytest.fixture
def collector():
    return ErrorCollector()


@pytest.fixture
def caller(collector):
    """재시도 없는 RemoteCaller"""
    return RemoteCaller(CancelToken(), collector, NO_RETRY)


@pytest.fixture
def populated_client():
    """모든 카테고리에 응답이 있는 FakeResourceClient"""
    return FakeResourceClient(
        {
            "list_compartments": [
                {"id": "ocid1.compartment.oc1..prod", "name": "prod", "compartment_id": TENANCY_ID},
                {"id": "ocid1.compartment.oc1..app", "name": "app", "compartment_id": "ocid1.compartment.oc1..prod"},
            ],
            "list_availability_domains": [{"id": "ad-1-id", "name": "TEST:US-ASHBURN-AD-1"}],
            "list_fault_domains": [{"name": "FAULT-DOMAIN-1"}, {"name": "FAULT-DOMAIN-2"}],
            "list_shapes": [
                {"shape": "VM.Standard.A1.Flex", "ocpus": 1, "memory_in_gbs": 6, "ocpu_options": {"max": 80}},
                {"shape": "VM.Standard.E2.1.Micro", "ocpus": 1, "memory_in_gbs": 1},
            ],
            "list_images": by_argument(
                {
                    "Canonical Ubuntu": [
                        {
                            "id": "img-ubuntu",
                            "display_name": "Canonical-Ubuntu-24.04-aarch64",
                            "operating_system": "Canonical Ubuntu",
                            "operating_system_version": "24.04",
                        }
                    ]
                }
            ),
            "list_vcns": [
                {"id": "vcn-1", "display_name": "main-vcn", "cidr_block": "10.0.0.0/16", "compartment_id": "c-net"}
            ],
            "list_volumes": [{"id": "vol-1", "display_name": "data", "size_in_gbs": 50}],
            "list_limit_values": by_argument({"compute": [{"name": "standard-a1-core-count", "value": 4}]}),
        }
    )


@pytest.fixture
def service_error():
    """oci ServiceError 팩토리"""
    return make_service_error


@pytest.fixture
def make_client():
    """FakeResourceClient 팩토리"""
    return FakeResourceClient


@pytest.fixture
def no_retry():
    """대기 없는 재시도 설정"""
    return NO_RETRY
