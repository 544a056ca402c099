"""
tests/core/discovery/test_caller.py - core/discovery/caller.py 테스트
"""

from unittest.mock import MagicMock, patch

import pytest

from core.discovery.caller import RemoteCaller
from core.discovery.client import Page
from core.exceptions import DiscoveryCancelledError
from core.parallel import CancelToken, ErrorCollector, RetryConfig, get_rate_limiter

TENANCY = "ocid1.tenancy.oc1..test"


class TestRemoteCallerCall:
    """RemoteCaller.call 테스트"""

    def test_returns_result(self, caller):
        """호출 결과 반환"""
        assert caller.call("identity", "tenancy", lambda: {"id": "t"}) == {"id": "t"}

    def test_cancelled_token_blocks_call(self, no_retry):
        """취소된 토큰이면 원격 호출 없이 중단"""
        token = CancelToken()
        token.cancel("shapes")
        func = MagicMock()

        with pytest.raises(DiscoveryCancelledError):
            RemoteCaller(token, retry_config=no_retry).call("network", "vcns", func)
        func.assert_not_called()

    def test_retries_transient_error(self, service_error):
        """재시도 가능 에러는 재시도 후 성공"""
        func = MagicMock(side_effect=[service_error(429, "TooManyRequests"), "ok"])
        caller = RemoteCaller(retry_config=RetryConfig(max_retries=2, base_delay=0.0, jitter=False))

        assert caller.call("compute", "shapes", func) == "ok"
        assert func.call_count == 2

    def test_non_retryable_propagates(self, caller, service_error):
        """재시도 불가 에러는 그대로 전파"""
        func = MagicMock(side_effect=service_error(404, "NotAuthorizedOrNotFound"))

        with pytest.raises(Exception) as exc_info:
            caller.call("network", "vcns", func)
        assert exc_info.value.code == "NotAuthorizedOrNotFound"
        assert func.call_count == 1

    def test_rate_limiter_timeout(self, no_retry):
        """rate limiter 토큰을 얻지 못하면 TimeoutError"""
        limiter = get_rate_limiter("limits")
        limiter.try_acquire(int(limiter.available_tokens))
        caller = RemoteCaller(retry_config=no_retry, rate_limit_timeout=0)
        func = MagicMock()

        with pytest.raises(TimeoutError):
            caller.call("limits", "limits", func)
        func.assert_not_called()


class TestRemoteCallerPaginate:
    """RemoteCaller.paginate 테스트"""

    def test_reads_all_pages_in_order(self, caller, make_client):
        """모든 페이지를 순서대로 읽음"""
        items = [{"id": f"vcn-{i}"} for i in range(5)]
        client = make_client({"list_vcns": items}, page_size=2)

        result = caller.paginate("network", "vcns", lambda page: client.list_vcns(TENANCY, page))

        assert [i["id"] for i in result] == [f"vcn-{i}" for i in range(5)]
        assert [call[3] for call in client.calls] == [None, "2", "4"]

    def test_empty_listing(self, caller, make_client):
        """빈 목록"""
        client = make_client({"list_vcns": []})

        assert caller.paginate("network", "vcns", lambda page: client.list_vcns(TENANCY, page)) == []
        assert len(client.calls) == 1

    def test_mid_page_failure_fails_whole_listing(self, caller, service_error):
        """중간 페이지 실패는 전체 목록 실패"""
        pages = {
            None: Page(items=[{"id": "a"}], next_page="p2"),
            "p2": service_error(500, "InternalServerError"),
        }

        def fetch(page):
            response = pages[page]
            if isinstance(response, Exception):
                raise response
            return response

        with pytest.raises(Exception) as exc_info:
            caller.paginate("compute", "shapes", fetch)
        assert exc_info.value.status == 500

    def test_page_limit_fails_listing(self, caller):
        """페이지 상한까지 끝나지 않는 목록은 잘린 결과 대신 에러"""
        requested = []

        def fetch(page):
            requested.append(page)
            return Page(items=[{"id": f"img-{len(requested)}"}], next_page=f"p{len(requested)}")

        with patch("core.discovery.caller.MAX_PAGES", 3):
            with pytest.raises(RuntimeError, match="페이지 수 상한"):
                caller.paginate("compute", "images", fetch)
        assert requested == [None, "p1", "p2"]

    def test_cancel_between_pages(self, collector, no_retry):
        """페이지 사이에 취소되면 다음 페이지를 요청하지 않음"""
        token = CancelToken()
        requested = []

        def fetch(page):
            requested.append(page)
            token.cancel("tenancy")
            return Page(items=[{"id": "x"}], next_page="next")

        caller = RemoteCaller(token, collector, no_retry)

        with pytest.raises(DiscoveryCancelledError):
            caller.paginate("compute", "images", fetch)
        assert requested == [None]


class TestRemoteCallerTryOrDefault:
    """RemoteCaller.try_or_default 테스트"""

    def test_failure_collects_warning(self, service_error):
        """실패 시 기본값 + 경고 수집"""
        collector = ErrorCollector()
        caller = RemoteCaller(collector=collector)

        def fail():
            raise service_error(404, "NotAuthorizedOrNotFound")

        result = caller.try_or_default(fail, [], category="vcns", operation="list_subnets", resource_id="prod")

        assert result == []
        warning = collector.errors[0]
        assert (warning.category, warning.operation, warning.resource_id) == ("vcns", "list_subnets", "prod")

    def test_cancellation_not_swallowed(self):
        """취소는 기본값으로 대체하지 않음"""
        token = CancelToken()
        token.cancel("tenancy")
        caller = RemoteCaller(token)

        with pytest.raises(DiscoveryCancelledError):
            caller.try_or_default(
                lambda: caller.call("network", "vcns", lambda: []),
                [],
                category="vcns",
                operation="list_subnets",
            )
