"""
core/discovery/policy.py - 카테고리별 실패 정책 테이블

카테고리 실패가 실행 전체를 중단시키는지(FATAL), 경고 후 계속 진행하는지
(TOLERABLE)를 선언적으로 정의합니다. 실행기는 이 테이블만 참조합니다.
"""

from __future__ import annotations

from types import MappingProxyType

from core.parallel import FailurePolicy

CATEGORY_POLICY = MappingProxyType(
    {
        # 산출물 생성에 필수
        "tenancy": FailurePolicy.FATAL,
        "compartments": FailurePolicy.FATAL,
        "availability_domains": FailurePolicy.FATAL,
        "shapes": FailurePolicy.FATAL,
        "images": FailurePolicy.FATAL,
        # 없어도 산출물 생성 가능
        "vcns": FailurePolicy.TOLERABLE,
        "block_volumes": FailurePolicy.TOLERABLE,
        "limits": FailurePolicy.TOLERABLE,
    }
)

# Snapshot 필드 순서와 동일
CATEGORIES = tuple(CATEGORY_POLICY)


def policy_for(category: str) -> FailurePolicy:
    """카테고리의 실패 정책 반환 (등록되지 않은 카테고리는 FATAL)"""
    return CATEGORY_POLICY.get(category, FailurePolicy.FATAL)
