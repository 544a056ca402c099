"""
core/discovery/orchestrator.py - 리소스 탐색 오케스트레이터

카테고리별 탐색 작업을 병렬 실행하고 결과를 하나의 Snapshot으로 통합합니다.

실행 흐름:
    1. 카테고리(tenancy, compartments, ...)마다 작업 하나를 만들어 fan-out
    2. 첫 FATAL 실패 시 CancelToken 설정 → 나머지 작업은 다음 원격 호출 전에 중단
    3. 모든 워커가 종료된 뒤 호출 스레드에서 TaskResult를 Snapshot 필드에 대입
    4. TOLERABLE 실패는 경고로 수집하고 해당 필드는 비워둔 채 계속 진행

Example:
    result = DiscoveryOrchestrator(client, tenancy_id, region="us-ashburn-1").run()
    for warning in result.warnings:
        print(warning)
    snapshot = result.snapshot
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from core.exceptions import DiscoveryCancelledError, FatalDiscoveryError, TolerableDiscoveryError
from core.parallel import (
    CancelToken,
    CollectedError,
    ErrorCollector,
    ParallelTask,
    RetryConfig,
    TaskState,
    fan_out,
)
from core.parallel.executor import ProgressTracker

from .always_free import filter_snapshot
from .caller import RemoteCaller
from .client import OCIResourceClient, ResourceClient
from .policy import CATEGORIES, policy_for
from .services import (
    collect_availability_domains,
    collect_block_volumes,
    collect_compartments,
    collect_images,
    collect_limits,
    collect_shapes,
    collect_tenancy,
    collect_vcns,
)
from .types import Snapshot, TenancyInfo

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """탐색 실행 결과

    Attributes:
        snapshot: 통합된 Snapshot
        warnings: 허용 가능한 실패 목록 (사용자 경고용)
        skipped: 전체가 실패해 비워둔 TOLERABLE 카테고리
    """

    snapshot: Snapshot
    warnings: list[CollectedError] = field(default_factory=list)
    skipped: list[TolerableDiscoveryError] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


class DiscoveryOrchestrator:
    """카테고리별 탐색 fan-out 및 Snapshot 통합

    Args:
        client: ResourceClient 구현
        tenancy_id: Tenancy OCID (모든 목록 조회의 범위)
        region: 실행 리전 (TenancyInfo.home_region에 기록)
        max_workers: 최대 동시 작업 수 (None이면 카테고리 수)
        retry_config: 원격 호출 재시도 설정
        progress_tracker: 카테고리 완료 알림 (선택사항)
    """

    def __init__(
        self,
        client: ResourceClient,
        tenancy_id: str,
        region: str = "",
        max_workers: int | None = None,
        retry_config: RetryConfig | None = None,
        progress_tracker: ProgressTracker | None = None,
    ):
        self.client = client
        self.tenancy_id = tenancy_id
        self.region = region
        self.max_workers = max_workers
        self.retry_config = retry_config
        self.progress_tracker = progress_tracker

    def _collectors(self) -> dict[str, Callable[[RemoteCaller], Any]]:
        client, tenancy_id = self.client, self.tenancy_id
        return {
            "tenancy": lambda caller: collect_tenancy(client, caller, tenancy_id, self.region),
            "compartments": lambda caller: collect_compartments(client, caller, tenancy_id),
            "availability_domains": lambda caller: collect_availability_domains(client, caller, tenancy_id),
            "shapes": lambda caller: collect_shapes(client, caller, tenancy_id),
            "images": lambda caller: collect_images(client, caller, tenancy_id),
            "vcns": lambda caller: collect_vcns(client, caller, tenancy_id),
            "block_volumes": lambda caller: collect_block_volumes(client, caller, tenancy_id),
            "limits": lambda caller: collect_limits(client, caller, tenancy_id),
        }

    def _build_tasks(self, collector: ErrorCollector) -> list[ParallelTask[Any]]:
        collectors = self._collectors()

        def make_task(category: str) -> ParallelTask[Any]:
            func = collectors[category]

            def run(token: CancelToken) -> Any:
                caller = RemoteCaller(token, collector, self.retry_config)
                logger.info(f"탐색 시작: {category}")
                return func(caller)

            return ParallelTask(identifier=category, func=run, policy=policy_for(category))

        return [make_task(category) for category in CATEGORIES]

    def run(self, cancel_token: CancelToken | None = None) -> DiscoveryResult:
        """전체 카테고리 탐색 실행

        Args:
            cancel_token: 외부 취소 토큰 (선택사항)

        Returns:
            DiscoveryResult

        Raises:
            FatalDiscoveryError: FATAL 카테고리가 실패한 경우
            DiscoveryCancelledError: 외부에서 취소된 경우
        """
        token = cancel_token or CancelToken()
        collector = ErrorCollector()

        exec_result = fan_out(
            self._build_tasks(collector),
            max_workers=self.max_workers,
            cancel_token=token,
            progress_tracker=self.progress_tracker,
        )

        if exec_result.aborted_by is not None:
            failed = exec_result.aborted_by
            cause = failed.error.original_exception if failed.error else None
            raise FatalDiscoveryError(failed.identifier, cause)

        if exec_result.cancelled_count:
            raise DiscoveryCancelledError(token.reason or "unknown")

        snapshot = Snapshot(tenancy=TenancyInfo(id=self.tenancy_id, home_region=self.region))
        skipped: list[TolerableDiscoveryError] = []
        for task_result in exec_result.results:
            if task_result.state == TaskState.SUCCEEDED:
                setattr(snapshot, task_result.identifier, task_result.data)
            elif task_result.state == TaskState.FAILED_TOLERABLE and task_result.error:
                error = task_result.error.original_exception or RuntimeError(task_result.error.message)
                collector.collect(error, task_result.identifier, "discover")
                skipped.append(TolerableDiscoveryError(task_result.identifier, error))

        logger.info(
            f"탐색 완료: compartments={len(snapshot.compartments)}, shapes={len(snapshot.shapes)}, "
            f"images={len(snapshot.images)}, vcns={len(snapshot.vcns)}, 경고 {len(collector.errors)}건"
        )

        return DiscoveryResult(snapshot=snapshot, warnings=collector.errors, skipped=skipped)


def discover(
    ctx: Any,
    client: ResourceClient | None = None,
    progress_tracker: ProgressTracker | None = None,
) -> DiscoveryResult:
    """DiscoveryContext 기준 탐색 실행 편의 함수

    ctx.always_free가 설정되어 있으면 Always-Free 필터를 적용합니다.

    Args:
        ctx: core.auth.DiscoveryContext
        client: ResourceClient (None이면 ctx.config로 OCIResourceClient 생성)
        progress_tracker: 진행 상황 추적기 (선택사항)

    Returns:
        DiscoveryResult
    """
    if client is None:
        client = OCIResourceClient(ctx.config, region=ctx.region)

    result = DiscoveryOrchestrator(
        client,
        ctx.tenancy_id,
        region=ctx.region,
        progress_tracker=progress_tracker,
    ).run()

    if ctx.always_free:
        result.snapshot = filter_snapshot(result.snapshot)
        logger.info(f"Always-Free 필터 적용: shapes={len(result.snapshot.shapes)}, images={len(result.snapshot.images)}")

    return result
