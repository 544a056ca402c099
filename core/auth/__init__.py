"""
core/auth - OCI 설정 로드 모듈

OCI CLI와 같은 규칙으로 설정 파일/프로파일을 찾고,
oci SDK로 로드하여 DiscoveryContext를 만듭니다.

사용 예시:
    from core.auth import load_context, resolve_config_path, resolve_profile

    ctx = load_context(
        resolve_profile(None),
        resolve_config_path(config_file=None, config_dir="~/.oci"),
        region_override=None,
    )
"""

from .context import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_PROFILE,
    DiscoveryContext,
    load_context,
    resolve_config_path,
    resolve_profile,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_PROFILE",
    "DiscoveryContext",
    "load_context",
    "resolve_config_path",
    "resolve_profile",
]
