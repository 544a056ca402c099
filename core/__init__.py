# core/__init__.py
"""
core - oci-tf-bootstrap 핵심 패키지

OCI Tenancy 탐색과 Terraform 산출물 생성을 담당합니다.

아키텍처:
    core/
    ├── auth/           # OCI 설정 파일/프로파일 로드 (DiscoveryContext)
    ├── parallel/       # 병렬 처리 (fan-out executor, rate limiter, 재시도, 취소)
    ├── discovery/      # 카테고리별 리소스 탐색, 실패 정책, Always-Free 필터
    ├── renderer/       # Terraform 파일 생성, 이름 발급
    ├── config.py       # 버전 및 기본값
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.auth import load_context, resolve_config_path, resolve_profile
    from core.discovery import discover
    from core.renderer import GeneratorOptions, TerraformGenerator

    ctx = load_context(resolve_profile(None), resolve_config_path(), None)
    result = discover(ctx)
    TerraformGenerator(result.snapshot, GeneratorOptions()).generate("./terraform")
"""

from core import auth, config, discovery, exceptions, parallel, renderer

__all__: list[str] = [
    # 서브패키지
    "auth",
    "parallel",
    "discovery",
    "renderer",
    # 모듈
    "config",
    "exceptions",
]
